"""Exception hierarchy for Isoliner."""

from typing import Any


class IsolinerError(Exception):
    """Base exception for all Isoliner errors."""

    pass


class FieldError(IsolinerError):
    """Errors related to scalar field construction or access."""

    pass


class FieldShapeError(FieldError):
    """Field dimensions or sample count are invalid."""

    def __init__(self, width: int, height: int, sample_count: int, reason: str) -> None:
        self.width = width
        self.height = height
        self.sample_count = sample_count
        self.reason = reason
        super().__init__(
            f"Invalid field {width}x{height} with {sample_count} samples: {reason}"
        )


class OutOfBoundsError(FieldError):
    """Sample or cell coordinate outside the field.

    This is a caller error, never a recoverable runtime condition.
    """

    def __init__(self, kind: str, x: int, y: int, width: int, height: int) -> None:
        self.kind = kind
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(
            f"Invalid {kind} coordinates ({x}, {y}) for {width}x{height} field"
        )


class ExtractionError(IsolinerError):
    """Errors raised while extracting contours for one threshold."""

    pass


class InvalidClassificationError(ExtractionError):
    """Cell classification id outside [0, 15]."""

    def __init__(self, case_id: int) -> None:
        self.case_id = case_id
        super().__init__(f"Invalid cell classification id: {case_id}")


class TopologyContradictionError(ExtractionError):
    """A segment matched more than one path tail or path head.

    Attributes:
        segment: The offending segment
        tail_matches: Handles of paths whose tail equals the segment start
        head_matches: Handles of paths whose head equals the segment end
        threshold: Threshold being extracted, if known
    """

    def __init__(
        self,
        segment: Any,
        tail_matches: list[int],
        head_matches: list[int],
        threshold: float | None = None,
    ) -> None:
        self.segment = segment
        self.tail_matches = list(tail_matches)
        self.head_matches = list(head_matches)
        self.threshold = threshold
        super().__init__(
            f"Topology contradiction at segment {segment}: "
            f"{len(self.tail_matches)} tail matches {self.tail_matches}, "
            f"{len(self.head_matches)} head matches {self.head_matches}"
        )

    def diagnostic(self) -> dict[str, Any]:
        """Structured payload for logging.

        Returns:
            Dictionary describing the contradiction
        """
        return {
            "segment": str(self.segment),
            "tail_matches": self.tail_matches,
            "head_matches": self.head_matches,
            "threshold": self.threshold,
        }


class ImageError(IsolinerError):
    """Errors related to reading input images or writing output."""

    pass


class ImageLoadError(ImageError):
    """Error decoding an input image."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class OutputWriteError(ImageError):
    """Error writing the rendered output."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write output '{path}': {reason}")


class ProcessingCancelledError(IsolinerError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
