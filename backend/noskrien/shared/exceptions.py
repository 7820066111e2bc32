"""Domain exceptions."""


class NoskrienError(Exception):
    """Base exception for race history errors."""
    pass


class DataDirectoryError(NoskrienError, FileNotFoundError):
    """Data directory is missing or has an unexpected layout."""
    pass


class MergeExecutionError(NoskrienError):
    """
    A merge action failed while being applied to storage.

    Actions before the failing one stay applied. Re-running the merge
    recomputes a smaller plan from the partially merged state.
    """

    def __init__(self, action, applied: int, cause: Exception):
        self.action = action
        self.applied = applied
        self.cause = cause
        super().__init__(
            f"Merge of '{action.old_name}' (id:{action.old_id}) into "
            f"'{action.new_name}' (id:{action.new_id}) failed after "
            f"{applied} applied actions: {cause}"
        )
