from database.store import DocumentStore


class BaseRepository:
    def __init__(self, store: DocumentStore):
        self.store = store
        self.db = store.db
