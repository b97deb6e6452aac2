"""
conftest.py - Shared pytest fixtures for horizontal pager tests

This module provides standardized test fixtures for use across all tests.
It includes fixtures for:
- Path setup and Python path configuration
- Configuration management
- Platform metrics, a controllable clock and recording pages
- Measured pagers ready for gesture scenarios
- GUI testing support
"""
import os
import sys
import json
import pathlib
import pytest
from unittest.mock import MagicMock

# Add the src/python directory to the Python path
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent / "src" / "python"))

# Run Qt without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Imports from pager modules (now that path is configured)
from config_manager import ConfigManager
from custom_types import MotionEvent
from horizontal_pager import HorizontalPager
from platform_metrics import PlatformMetrics


# Path and Environment Fixtures
# ----------------------------

@pytest.fixture
def pager_paths():
    """Provide standard paths to key project directories."""
    root_dir = pathlib.Path(__file__).parent.parent
    return {
        'root': root_dir,
        'src': root_dir / 'src',
        'python': root_dir / 'src' / 'python',
        'config': root_dir / 'config',
        'tests': root_dir / 'tests'
    }


# Configuration Fixtures
# ---------------------

@pytest.fixture
def test_config_data():
    """Create minimal test configuration data."""
    return {
        "colors": {
            "palette": {
                "background": "#121212",
                "text": "#FFFFFF",
                "page0": "#1E88E5"
            },
            "fonts": {
                "primary": "Arial"
            }
        },
        "strings": {
            "app": {
                "name": "Pager Test"
            },
            "demo": {
                "windowTitle": "Pager Test Demo",
                "pageTitles": ["One", "Two", "Three"],
                "lipsum": "lorem ipsum dolor sit amet"
            }
        },
        "ui": {
            "pager": {
                "frameIntervalMs": 5,
                "background": "background"
            },
            "demo": {
                "width": 300,
                "height": 400,
                "listSize": 20,
                "listPage": 2
            }
        },
        "platform": {
            "touchSlopDp": 8,
            "maximumFlingVelocityDp": 4000,
            "density": 2.0
        },
        "gestures": {
            "interceptTracksMotion": False
        },
        "logging": {
            "level": "DEBUG",
            "file": "",
            "console": False
        }
    }


@pytest.fixture
def test_config_file(tmp_path, test_config_data):
    """Write the test configuration to a temporary file."""
    config_file = tmp_path / "test_config.json"
    with open(config_file, 'w') as f:
        json.dump(test_config_data, f)
    return config_file


@pytest.fixture
def test_config_manager(test_config_file):
    """Create a ConfigManager instance with test configuration."""
    return ConfigManager(cfg_path=test_config_file, exit_on_error=False)


@pytest.fixture
def mock_config_manager():
    """Create a mocked ConfigManager for lightweight tests."""
    mock_manager = MagicMock(spec=ConfigManager)
    mock_manager.get_platform_config.return_value = {
        "touchSlopDp": 8,
        "maximumFlingVelocityDp": 8000,
        "density": 1.0
    }
    mock_manager.get_gesture_config.return_value = {"interceptTracksMotion": False}
    mock_manager.get_pager_host_config.return_value = {
        "frameIntervalMs": 5,
        "background": "background"
    }
    mock_manager.get_color.return_value = "#000000"
    return mock_manager


# Pager Fixtures
# --------------

class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class RecordingPage:
    """Page that records the constraints and slot it was given."""

    def __init__(self, name: str = "page"):
        self.name = name
        self.measured = None
        self.slot = None

    def measure(self, width_spec, height_spec):
        self.measured = (width_spec, height_spec)

    def layout(self, left, top, right, bottom):
        self.slot = (left, top, right, bottom)


class CountingVelocityTrackerFactory:
    """Velocity tracker factory that counts acquisitions and releases."""

    def __init__(self):
        from velocity_tracker import VelocityTracker
        self._tracker_class = VelocityTracker
        self.acquired = 0
        self.released = 0

    def __call__(self):
        factory = self
        self.acquired += 1

        class _Tracker(self._tracker_class):
            def reset(self):
                factory.released += 1
                super().reset()

        return _Tracker()


@pytest.fixture
def metrics():
    """Platform metrics of the reference scenarios (snap velocity 600 px/s)."""
    return PlatformMetrics(touch_slop=8, max_fling_velocity=8000, display_density=1.0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tracker_factory():
    return CountingVelocityTrackerFactory()


@pytest.fixture
def switches():
    """List collecting listener notifications."""
    return []


def make_pager(metrics, clock, page_count=5, width=1000, height=800,
               current_page=0, tracker_factory=None, listener=None, **kwargs):
    """Build and measure a pager showing `current_page`."""
    options = dict(kwargs)
    if tracker_factory is not None:
        options["velocity_tracker_factory"] = tracker_factory
    pager = HorizontalPager(metrics, clock=clock, listener=listener, **options)
    for i in range(page_count):
        pager.add_page(RecordingPage(f"page{i}"))
    pager.set_current_page(current_page)
    pager.on_measure(width, height)
    pager.on_layout()
    return pager


def run_animation(pager, clock, frame_ms=16, max_frames=1000):
    """Tick the pager until its animation finishes; returns the offsets seen."""
    offsets = []
    for _ in range(max_frames):
        clock.advance(frame_ms)
        running = pager.tick()
        offsets.append(pager.offset_x)
        if not running:
            return offsets
    raise AssertionError("animation did not finish")


def drag(pager, points, start_ms=0.0, step_ms=10.0):
    """Deliver DOWN, MOVEs and UP the way a host does.

    Events go to on_intercept until it claims the gesture, then to on_touch.
    `points` are (x, y) or (x, y, time_ms) tuples; the last one is the UP.
    Returns the list of intercept results for the events sent to it.
    """
    claimed = False
    results = []
    for index, point in enumerate(points):
        if len(point) == 3:
            x, y, t = point
        else:
            x, y = point
            t = start_ms + index * step_ms
        if index == 0:
            event = MotionEvent.down(x, y, t)
        elif index == len(points) - 1:
            event = MotionEvent.up(x, y, t)
        else:
            event = MotionEvent.move(x, y, t)

        if claimed:
            pager.on_touch(event)
        else:
            claimed = pager.on_intercept(event)
            results.append(claimed)
    return results


@pytest.fixture
def scenario_pager(metrics, clock, tracker_factory, switches):
    """Five 1000px pages showing page 2 at offset 2000."""
    return make_pager(metrics, clock, page_count=5, width=1000, current_page=2,
                      tracker_factory=tracker_factory, listener=switches.append)


# GUI Testing Fixtures
# ------------------

@pytest.fixture(scope="session")
def qt_app():
    """Create a QApplication instance that persists for the test session."""
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:
        pytest.skip("PyQt6 not installed, skipping test")

    # Check if an instance already exists
    app = QApplication.instance()
    if app is None:
        # Create a new application with dummy arguments
        app = QApplication([''])

    yield app
