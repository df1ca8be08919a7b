"""Domain errors."""


class RecordNotFoundError(LookupError):
    """Raised when an update targets a record id that does not exist."""

    def __init__(self, collection: str, record_id: int) -> None:
        super().__init__(f"{collection} record {record_id} not found")
        self.collection = collection
        self.record_id = record_id
