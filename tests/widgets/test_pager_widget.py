"""
Tests for the Qt pager host and the demo window.

These run the real widgets on the offscreen platform: pages are plain
QLabels, input is delivered as synthetic mouse events to a page so it
goes through the application-wide intercept filter.
"""
import json
import logging
import random

import pytest
from PyQt6.QtCore import QEvent, QPointF, QSettings, Qt
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import QApplication, QLabel

from config_manager import ConfigManager
from enums import TouchState
from ui.pager_widget import PagerWidget
from ui.pager_demo import CURRENT_PAGE_KEY, PagerDemoWindow, generate_words

WIDTH = 300
HEIGHT = 200


@pytest.fixture
def pager_widget(qtbot, test_config_manager):
    """Three-page pager widget, 300x200, shown offscreen."""
    widget = PagerWidget(cfg=test_config_manager)
    qtbot.addWidget(widget)
    for title in ("One", "Two", "Three"):
        widget.add_page(QLabel(title))
    widget.resize(WIDTH, HEIGHT)
    widget.show()
    widget.relayout()
    return widget


def send_mouse(target, event_type, local_pos, buttons=Qt.MouseButton.LeftButton):
    """Deliver a synthetic left-button mouse event to `target`."""
    button = Qt.MouseButton.NoButton if event_type == QEvent.Type.MouseMove \
        else Qt.MouseButton.LeftButton
    global_pos = target.mapToGlobal(local_pos)
    event = QMouseEvent(event_type, local_pos, global_pos, button, buttons,
                        Qt.KeyboardModifier.NoModifier)
    QApplication.sendEvent(target, event)


class TestPagerWidget:
    """Tests for PagerWidget layout, navigation and input."""

    def test_pages_fill_the_widget(self, pager_widget):
        assert pager_widget.pager.page_count == 3
        assert pager_widget.pager.page_width == WIDTH
        for index, page in enumerate(pager_widget.page_widgets()):
            geometry = page.geometry()
            assert geometry.x() == index * WIDTH
            assert geometry.width() == WIDTH
            assert geometry.height() == HEIGHT

    def test_set_current_page_without_animation(self, pager_widget):
        pager_widget.set_current_page(2)
        assert pager_widget.current_page() == 2
        pages = pager_widget.page_widgets()
        assert pages[2].geometry().x() == 0
        assert pages[0].geometry().x() == -2 * WIDTH

    def test_animated_switch_emits_signal(self, qtbot, pager_widget):
        with qtbot.waitSignal(pager_widget.page_switched, timeout=3000) as blocker:
            pager_widget.set_current_page(1, animate=True)
        assert blocker.args == [1]
        assert pager_widget.pager.offset_x == WIDTH
        assert pager_widget.page_widgets()[1].geometry().x() == 0

    def test_resize_keeps_current_page(self, qtbot, pager_widget):
        pager_widget.set_current_page(2)
        pager_widget.resize(200, HEIGHT)
        pager_widget.relayout()
        qtbot.waitUntil(lambda: not pager_widget.pager.is_animating(), timeout=1000)
        assert pager_widget.current_page() == 2
        assert pager_widget.pager.offset_x == 400

    def test_resize_realigns_immediately(self, pager_widget):
        pager_widget.set_current_page(1)
        pager_widget.resize(250, HEIGHT)
        assert not pager_widget.pager.is_animating()
        assert pager_widget.pager.offset_x == 250
        assert pager_widget.page_widgets()[1].geometry().x() == 0

    def test_touch_after_resize_is_not_a_fling_catch(self, pager_widget):
        pager_widget.resize(260, HEIGHT)
        page = pager_widget.page_widgets()[0]
        send_mouse(page, QEvent.Type.MouseButtonPress, QPointF(100, 20))
        assert pager_widget.pager.touch_state == TouchState.REST
        send_mouse(page, QEvent.Type.MouseMove, QPointF(102, 150))
        assert pager_widget.pager.touch_state == TouchState.VERTICAL
        send_mouse(page, QEvent.Type.MouseButtonRelease, QPointF(102, 150),
                   buttons=Qt.MouseButton.NoButton)

    def test_save_and_restore_state(self, pager_widget):
        pager_widget.set_current_page(2)
        state = pager_widget.save_state()
        pager_widget.set_current_page(0)
        pager_widget.restore_state(state)
        assert pager_widget.current_page() == 2

    def test_remove_page_clamps_current_page(self, pager_widget):
        pager_widget.set_current_page(2)
        last = pager_widget.page_widgets()[2]
        pager_widget.remove_page(last)
        assert last.parent() is None
        assert pager_widget.pager.page_count == 2
        assert pager_widget.current_page() == 1
        last.deleteLater()

    def test_remove_unknown_widget_is_ignored(self, qtbot, pager_widget):
        stranger = QLabel("stranger")
        qtbot.addWidget(stranger)
        pager_widget.remove_page(stranger)
        assert pager_widget.pager.page_count == 3

    def test_horizontal_drag_on_page_switches(self, qtbot, pager_widget):
        page = pager_widget.page_widgets()[0]
        with qtbot.waitSignal(pager_widget.page_switched, timeout=3000) as blocker:
            send_mouse(page, QEvent.Type.MouseButtonPress, QPointF(250, 100))
            send_mouse(page, QEvent.Type.MouseMove, QPointF(200, 100))
            assert pager_widget.pager.touch_state == TouchState.HORIZONTAL
            send_mouse(page, QEvent.Type.MouseMove, QPointF(50, 100))
            send_mouse(page, QEvent.Type.MouseButtonRelease, QPointF(50, 100),
                       buttons=Qt.MouseButton.NoButton)
        assert blocker.args == [1]
        assert pager_widget.pager.touch_state == TouchState.REST

    def test_vertical_drag_is_left_to_the_page(self, pager_widget):
        page = pager_widget.page_widgets()[0]
        send_mouse(page, QEvent.Type.MouseButtonPress, QPointF(150, 20))
        send_mouse(page, QEvent.Type.MouseMove, QPointF(152, 150))
        assert pager_widget.pager.touch_state == TouchState.VERTICAL
        send_mouse(page, QEvent.Type.MouseButtonRelease, QPointF(152, 150),
                   buttons=Qt.MouseButton.NoButton)
        assert pager_widget.pager.touch_state == TouchState.REST
        assert pager_widget.pager.offset_x == 0

    def test_hide_cancels_gesture(self, pager_widget):
        page = pager_widget.page_widgets()[0]
        send_mouse(page, QEvent.Type.MouseButtonPress, QPointF(250, 100))
        send_mouse(page, QEvent.Type.MouseMove, QPointF(200, 100))
        pager_widget.hide()
        assert pager_widget.pager.touch_state == TouchState.REST


class TestPagerDemo:
    """Tests for the demo window."""

    @pytest.fixture
    def settings(self, tmp_path):
        return QSettings(str(tmp_path / "demo.ini"), QSettings.Format.IniFormat)

    def test_generate_words(self):
        words = generate_words("alpha beta gamma", 10, random.Random(3))
        assert len(words) == 10
        assert set(words) <= {"alpha", "beta", "gamma"}
        assert generate_words("", 5) == []

    def test_tabs_match_pages(self, qtbot, test_config_manager, settings):
        window = PagerDemoWindow(cfg=test_config_manager, settings=settings)
        qtbot.addWidget(window)
        assert window.windowTitle() == "Pager Test Demo"
        assert len(window.tab_group.buttons()) == 3
        assert window.pager.pager.page_count == 3
        assert window.tab_group.checkedId() == 0
        # The configured list page holds the generated words
        list_page = window.pager.page_widgets()[2]
        assert list_page.count() == 20

    def test_page_switch_checks_tab(self, qtbot, test_config_manager, settings):
        window = PagerDemoWindow(cfg=test_config_manager, settings=settings)
        qtbot.addWidget(window)
        window.show()
        with qtbot.waitSignal(window.pager.page_switched, timeout=3000):
            window.pager.set_current_page(1, animate=True)
        assert window.tab_group.checkedId() == 1

    def test_tab_click_switches_page(self, qtbot, test_config_manager, settings):
        window = PagerDemoWindow(cfg=test_config_manager, settings=settings)
        qtbot.addWidget(window)
        window.show()
        with qtbot.waitSignal(window.pager.page_switched, timeout=3000) as blocker:
            window.tab_group.button(2).click()
        assert blocker.args == [2]
        assert window.pager.current_page() == 2

    def test_current_page_persists(self, qtbot, test_config_manager, settings):
        settings.setValue(CURRENT_PAGE_KEY, 1)
        window = PagerDemoWindow(cfg=test_config_manager, settings=settings)
        qtbot.addWidget(window)
        window.show()
        assert window.pager.current_page() == 1
        assert window.tab_group.checkedId() == 1

        window.pager.set_current_page(2)
        window.close()
        assert settings.value(CURRENT_PAGE_KEY, type=int) == 2

    def test_missing_page_titles_builds_empty_pager(self, qtbot, caplog, tmp_path,
                                                    test_config_data, settings):
        del test_config_data["strings"]["demo"]["pageTitles"]
        config_file = tmp_path / "no_titles.json"
        with open(config_file, 'w') as f:
            json.dump(test_config_data, f)
        cfg = ConfigManager(cfg_path=config_file, exit_on_error=False)

        caplog.set_level(logging.WARNING, logger="pager.error_handler")
        window = PagerDemoWindow(cfg=cfg, settings=settings)
        qtbot.addWidget(window)
        assert window.pager.pager.page_count == 0
        assert window.tab_group.buttons() == []
        assert not [r for r in caplog.records if r.name == "pager.error_handler"]
