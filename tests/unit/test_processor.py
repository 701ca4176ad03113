"""Tests for parallel processing orchestration."""

from pathlib import Path as FilePath
from unittest.mock import MagicMock, Mock, patch

import pytest

from isoliner.config import ContourConfig, IsolinerSettings, LoggingConfig, RenderConfig
from isoliner.core.processor import ContourProcessor, process_threshold
from isoliner.domain import Path, PathPoint, Point, ScalarField, Segment
from isoliner.exceptions import TopologyContradictionError


@pytest.fixture
def blob_field() -> ScalarField:
    """3x3 field with a single high sample in the center."""
    return ScalarField.from_rows([[0, 0, 0], [0, 9, 0], [0, 0, 0]])


@pytest.fixture
def settings(tmp_path: FilePath) -> IsolinerSettings:
    """Settings extracting a single level and logging into tmp_path."""
    return IsolinerSettings(
        contour=ContourConfig(thresholds=[5.0]),
        logging=LoggingConfig(log_file=tmp_path / "isoliner.log"),
    )


def mock_reader_for(field: ScalarField) -> MagicMock:
    """FieldReader stand-in usable as a context manager."""
    reader = MagicMock()
    reader.__enter__.return_value = reader
    reader.__exit__.return_value = None
    reader.read_field.return_value = field
    return reader


def mock_executor_for(result: dict) -> tuple[MagicMock, MagicMock]:
    """Executor stand-in whose single future returns result."""
    executor = MagicMock()
    future = MagicMock()
    future.result.return_value = result
    executor.submit.return_value = future
    executor.__enter__.return_value = executor
    executor.__exit__.return_value = None
    return executor, future


class TestProcessThreshold:
    """Tests for process_threshold function."""

    def test_process_blob(self, blob_field: ScalarField):
        """Test extracting one threshold of a serialized field."""
        result = process_threshold(blob_field.to_dict(), 5.0)

        assert "error" not in result
        assert result["threshold"] == 5.0
        assert result["duration_ms"] >= 0

        paths = [Path.from_dict(p) for p in result["paths"]]
        assert len(paths) == 1
        assert paths[0].closed
        assert len(paths[0]) == 5

    def test_process_without_closing(self):
        """Border-to-border paths stay open when closing is disabled."""
        field = ScalarField.from_rows([[0, 9], [0, 9]])
        result = process_threshold(field.to_dict(), 5.0, close_boundaries=False)
        (path,) = [Path.from_dict(p) for p in result["paths"]]
        assert not path.closed

    def test_process_handles_invalid_field(self):
        """Test that malformed fields are reported, not raised."""
        result = process_threshold({"width": 1, "height": 1, "values": [0.0]}, 5.0)

        assert result["error_type"] == "FieldShapeError"
        assert result["diagnostic"] is None
        assert "traceback" in result
        assert result["threshold"] == 5.0

    def test_process_reports_contradiction(self, blob_field: ScalarField):
        """Topology contradictions carry their diagnostic payload."""
        point = PathPoint.fixed(Point(0.5, 1.0))
        error = TopologyContradictionError(
            Segment(start=point, end=point), [0, 1], [], threshold=5.0
        )
        with patch("isoliner.core.processor.extract_paths", side_effect=error):
            result = process_threshold(blob_field.to_dict(), 5.0)

        assert result["error_type"] == "TopologyContradictionError"
        assert result["diagnostic"]["tail_matches"] == [0, 1]
        assert result["diagnostic"]["threshold"] == 5.0


class TestContourProcessor:
    """Tests for ContourProcessor class."""

    def test_init(self, settings: IsolinerSettings):
        """Test ContourProcessor initialization."""
        with patch("isoliner.core.processor.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            processor = ContourProcessor(settings)

            assert processor.config == settings
            mock_logging.assert_called_once()

    @patch("isoliner.core.processor.configure_logging")
    def test_thresholds_for(self, mock_logging, blob_field: ScalarField):
        """Explicit thresholds win over evenly spaced levels."""
        mock_logging.return_value = Mock()

        explicit = ContourProcessor(
            IsolinerSettings(contour=ContourConfig(thresholds=[1.0, 2.0]))
        )
        assert explicit.thresholds_for(blob_field) == [1.0, 2.0]

        spaced = ContourProcessor(IsolinerSettings(contour=ContourConfig(levels=3)))
        assert spaced.thresholds_for(blob_field) == [0.0, 3.0, 6.0]

    @patch("isoliner.core.processor.configure_logging")
    def test_thresholds_for_drops_repeats(self, mock_logging, blob_field: ScalarField):
        """Repeated explicit thresholds are extracted once, in first-seen order."""
        mock_logging.return_value = Mock()

        processor = ContourProcessor(
            IsolinerSettings(contour=ContourConfig(thresholds=[5.0, 2.0, 5.0, 2.0, 7.0]))
        )
        assert processor.thresholds_for(blob_field) == [5.0, 2.0, 7.0]

    @patch("isoliner.core.processor.FieldReader")
    @patch("isoliner.core.processor.configure_logging")
    def test_load_field_logs_summary(self, mock_logging, mock_reader, blob_field: ScalarField):
        """Loading logs the field size and its cell count."""
        mock_logging.return_value = Mock()
        mock_reader.return_value = mock_reader_for(blob_field)

        processor = ContourProcessor(IsolinerSettings())
        assert processor.load_field(FilePath("blob.png")) is blob_field

        logger = mock_logging.return_value
        logger.debug.assert_called_once_with(
            "Field loaded", width=3, height=3, cells=4, min=0.0, max=9.0
        )

    @patch("isoliner.core.processor.FieldReader")
    @patch("isoliner.core.processor.SvgWriter")
    @patch("isoliner.core.processor.configure_logging")
    @patch("isoliner.core.processor.ProcessPoolExecutor")
    def test_process_with_levels(
        self,
        mock_executor_class,
        mock_logging,
        mock_writer_class,
        mock_reader_class,
        settings: IsolinerSettings,
        blob_field: ScalarField,
    ):
        """Test processing an image whose level extracts cleanly."""
        mock_logging.return_value = Mock()
        mock_reader_class.return_value = mock_reader_for(blob_field)

        mock_writer = Mock()
        mock_writer.path_count = 1
        mock_writer_class.return_value = mock_writer
        mock_writer_class.get_output_path.return_value = FilePath("out.svg")

        expected = process_threshold(blob_field.to_dict(), 5.0)
        mock_executor, mock_future = mock_executor_for(expected)
        mock_executor_class.return_value = mock_executor

        with patch("isoliner.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.return_value = [mock_future]

            processor = ContourProcessor(settings)
            stats = processor.process(FilePath("input.png"), max_workers=1)

        assert stats.processed_count == 1
        assert stats.path_count == 1
        assert stats.closed_count == 1
        assert stats.error_count == 0
        assert stats.duration_seconds >= 0

        mock_writer.add_level.assert_called_once()
        args, kwargs = mock_writer.add_level.call_args
        assert args[0] == 5.0
        assert len(args[1]) == 1
        assert kwargs["stroke"] == "black"
        mock_writer.save.assert_called_once_with(FilePath("out.svg"))

    @patch("isoliner.core.processor.FieldReader")
    @patch("isoliner.core.processor.SvgWriter")
    @patch("isoliner.core.processor.configure_logging")
    @patch("isoliner.core.processor.ProcessPoolExecutor")
    def test_process_handles_errors(
        self,
        mock_executor_class,
        mock_logging,
        mock_writer_class,
        mock_reader_class,
        settings: IsolinerSettings,
        blob_field: ScalarField,
    ):
        """Test that a failing level is logged and skipped."""
        mock_logging.return_value = Mock()
        mock_reader_class.return_value = mock_reader_for(blob_field)
        mock_writer = Mock()
        mock_writer_class.return_value = mock_writer

        mock_executor, mock_future = mock_executor_for(
            {
                "threshold": 5.0,
                "error": "Topology contradiction",
                "error_type": "TopologyContradictionError",
                "diagnostic": {"tail_matches": [0, 1]},
                "traceback": "Traceback...",
                "duration_ms": 0.1,
            }
        )
        mock_executor_class.return_value = mock_executor

        with patch("isoliner.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.return_value = [mock_future]

            processor = ContourProcessor(settings)
            stats = processor.process(FilePath("input.png"), FilePath("out.svg"), max_workers=1)

        assert stats.processed_count == 0
        assert stats.error_count == 1
        assert stats.errors == [(5.0, "Topology contradiction")]
        mock_writer.add_level.assert_not_called()
        mock_writer.save.assert_called_once()

    @patch("isoliner.core.processor.FieldReader")
    @patch("isoliner.core.processor.SvgWriter")
    @patch("isoliner.core.processor.configure_logging")
    @patch("isoliner.core.processor.ProcessPoolExecutor")
    def test_progress_callback(
        self,
        mock_executor_class,
        mock_logging,
        mock_writer_class,
        mock_reader_class,
        settings: IsolinerSettings,
        blob_field: ScalarField,
    ):
        """Progress is reported once per completed level."""
        mock_logging.return_value = Mock()
        mock_reader_class.return_value = mock_reader_for(blob_field)
        mock_writer_class.return_value = Mock()

        mock_executor, mock_future = mock_executor_for(
            process_threshold(blob_field.to_dict(), 5.0)
        )
        mock_executor_class.return_value = mock_executor
        callback = Mock()

        with patch("isoliner.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.return_value = [mock_future]
            processor = ContourProcessor(settings)
            processor.process(
                FilePath("input.png"),
                FilePath("out.svg"),
                max_workers=1,
                progress_callback=callback,
            )

        callback.assert_called_once_with(1, 1, 5.0, True)

    @patch("isoliner.core.processor.FieldReader")
    @patch("isoliner.core.processor.SvgWriter")
    @patch("isoliner.core.processor.configure_logging")
    def test_colored_levels(
        self,
        mock_logging,
        mock_writer_class,
        mock_reader_class,
        blob_field: ScalarField,
    ):
        """Colored rendering strokes each level from the palette."""
        mock_logging.return_value = Mock()
        mock_reader_class.return_value = mock_reader_for(blob_field)
        mock_writer = Mock()
        mock_writer_class.return_value = mock_writer

        settings = IsolinerSettings(render=RenderConfig(colored=True))
        processor = ContourProcessor(settings)
        path = Path(points=[PathPoint.fixed(Point(float(i), 0.0)) for i in range(3)])
        processor._save_svg(blob_field, [1.0, 2.0], {2.0: [path], 1.0: [path]}, FilePath("o.svg"))

        strokes = [c.kwargs["stroke"] for c in mock_writer.add_level.call_args_list]
        thresholds = [c.args[0] for c in mock_writer.add_level.call_args_list]
        assert thresholds == [1.0, 2.0]
        assert strokes == ["#2c7bb6", "#d7191c"]

    @patch("isoliner.core.processor.FieldReader")
    @patch("isoliner.core.processor.SvgWriter")
    @patch("isoliner.core.processor.configure_logging")
    def test_flat_field_writes_empty_document(
        self,
        mock_logging,
        mock_writer_class,
        mock_reader_class,
    ):
        """A flat image has no levels but still produces a document."""
        mock_logging.return_value = Mock()
        flat = ScalarField.from_rows([[4, 4], [4, 4]])
        mock_reader_class.return_value = mock_reader_for(flat)
        mock_writer = Mock()
        mock_writer_class.return_value = mock_writer

        processor = ContourProcessor(IsolinerSettings())
        stats = processor.process(FilePath("flat.png"), FilePath("flat.svg"))

        assert stats.processed_count == 0
        mock_writer.add_level.assert_not_called()
        mock_writer.save.assert_called_once_with(FilePath("flat.svg"))

    @patch("isoliner.core.processor.FieldReader")
    @patch("isoliner.core.processor.SvgWriter")
    @patch("isoliner.core.processor.configure_logging")
    @patch("isoliner.core.processor.ProcessPoolExecutor")
    def test_process_skips_levels_outside_range(
        self,
        mock_executor_class,
        mock_logging,
        mock_writer_class,
        mock_reader_class,
        tmp_path: FilePath,
        blob_field: ScalarField,
    ):
        """Levels below the minimum or at the maximum are never submitted."""
        mock_logging.return_value = Mock()
        mock_reader_class.return_value = mock_reader_for(blob_field)
        mock_writer_class.return_value = Mock()

        mock_executor, mock_future = mock_executor_for(
            process_threshold(blob_field.to_dict(), 5.0)
        )
        mock_executor_class.return_value = mock_executor

        settings = IsolinerSettings(contour=ContourConfig(thresholds=[-1.0, 5.0, 9.0]))
        with patch("isoliner.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.return_value = [mock_future]
            processor = ContourProcessor(settings)
            stats = processor.process(FilePath("input.png"), tmp_path / "out.svg", max_workers=1)

        assert stats.skipped_count == 2
        assert stats.processed_count == 1
        mock_executor.submit.assert_called_once()
