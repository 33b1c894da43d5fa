from app.client.state import AppState, InvalidTransition, Modal, View, transition

__all__ = ["AppState", "InvalidTransition", "Modal", "View", "transition"]
