class DisposeGenError(Exception):
    """Base class for all disposegen failures.

    Individual candidates never raise; these errors describe conditions that
    end a whole pass or misuse of an output sink.
    """


class GenerationCancelledError(DisposeGenError):
    """Signal that the host cancelled an analysis pass between candidates.

    Work items resolved before the cancellation are discarded; nothing from
    the pass reaches an artifact sink.
    """


class DuplicateArtifactError(DisposeGenError):
    """Signal that an artifact key was added twice to the same sink.

    One work item exists per qualifying type per pass, so this points at
    two passes sharing a sink or at a host feeding the same output twice.
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"Artifact {key!r} was already added")
        self.key = key
