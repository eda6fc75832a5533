from .firestore import DOCUMENTS_ROOT, FirestoreFake

__all__ = ["DOCUMENTS_ROOT", "FirestoreFake"]
