"""Errors raised at the engine boundary."""


class MissingWordData(Exception):
    """
    Too many requested word ids could not be resolved to word text.

    Attributes:
        missing_ids: Ids the catalog did not know, in request order.
        requested_count: Number of ids asked for.
        resolved_count: Number of ids that did resolve.
    """

    def __init__(self, missing_ids: list[int], requested_count: int, resolved_count: int):
        self.missing_ids = missing_ids
        self.requested_count = requested_count
        self.resolved_count = resolved_count
        preview = ", ".join(str(i) for i in missing_ids[:10])
        super().__init__(
            f"{len(missing_ids)} of {requested_count} word ids could not be resolved "
            f"({self.missing_ratio:.0%}): {preview}"
        )

    @property
    def missing_ratio(self) -> float:
        if self.requested_count == 0:
            return 0.0
        return len(self.missing_ids) / self.requested_count
