"""Demo window for the horizontal pager.

Shows a row of radio "tabs" above a PagerWidget. Swiping the pages checks
the matching tab, and checking a tab snaps the pager to its page. One page
is a long vertical list, so vertical drags on it scroll the list while
horizontal drags still switch pages.
"""

import logging
import random
import sys

from PyQt6.QtCore import QSettings, Qt
from PyQt6.QtWidgets import (
    QApplication, QButtonGroup, QHBoxLayout, QLabel, QListWidget,
    QMainWindow, QRadioButton, QVBoxLayout, QWidget
)

from config_manager import ConfigManager, config
from error_handler import ErrorHandler
from logging_config import setup_logging
from ui.pager_widget import PagerWidget

logger = logging.getLogger(__name__)

SETTINGS_ORG = "horizontal-pager"
SETTINGS_APP = "demo"
CURRENT_PAGE_KEY = "currentPage"


def generate_words(lipsum: str, count: int, rng: random.Random | None = None) -> list[str]:
    """Pick `count` random words from a lorem ipsum text."""
    words = lipsum.split()
    if not words:
        return []
    rng = rng or random.Random()
    return [rng.choice(words) for _ in range(count)]


class PagerDemoWindow(QMainWindow):
    """Main window with tab buttons and a swipeable pager."""

    def __init__(self, cfg: ConfigManager | None = None,
                 settings: QSettings | None = None) -> None:
        """Initialize the demo window.

        Args:
            cfg: Configuration to read (defaults to the module singleton)
            settings: Where the current page is kept between runs
        """
        super().__init__()
        self.cfg = cfg or config
        self.settings = settings or QSettings(SETTINGS_ORG, SETTINGS_APP)
        self._init_ui()

        saved = self.settings.value(CURRENT_PAGE_KEY, -1, type=int)
        self.pager.restore_state(saved)
        self._check_tab(self.pager.current_page())

    def _init_ui(self) -> None:
        """Initialize the user interface."""
        self.setWindowTitle(self.cfg.get_string("demo", "windowTitle", "Horizontal Pager Demo"))
        self.resize(
            self.cfg.get_ui_setting("demo", "width", 480),
            self.cfg.get_ui_setting("demo", "height", 720),
        )

        central = QWidget(self)
        main_layout = QVBoxLayout(central)
        self.setCentralWidget(central)

        titles = self.cfg.get_nested_string("demo.pageTitles", [])
        if not isinstance(titles, list):
            ErrorHandler.show_warning("demo.pageTitles must be a list of strings", "Configuration")
            titles = []

        self._create_tabs(main_layout, titles)
        self._create_pager(main_layout, titles)

    def _create_tabs(self, layout: QVBoxLayout, titles: list[str]) -> None:
        """Create one exclusive radio button per page.

        Args:
            layout: Layout to add the tab row to
            titles: Page titles used as button labels
        """
        tab_layout = QHBoxLayout()
        self.tab_group = QButtonGroup(self)
        self.tab_group.setExclusive(True)
        for index, title in enumerate(titles):
            button = QRadioButton(title)
            self.tab_group.addButton(button, index)
            tab_layout.addWidget(button)
        self.tab_group.idClicked.connect(self._on_tab_clicked)
        layout.addLayout(tab_layout)

    def _create_pager(self, layout: QVBoxLayout, titles: list[str]) -> None:
        """Create the pager and its pages.

        Args:
            layout: Layout to add the pager to
            titles: Page titles; the configured list page gets a word list
        """
        self.pager = PagerWidget(self, cfg=self.cfg)
        list_page = self.cfg.get_ui_setting("demo", "listPage", -1)

        for index, title in enumerate(titles):
            if index == list_page:
                page = self._create_list_page()
            else:
                page = self._create_label_page(index, title)
            self.pager.add_page(page)

        self.pager.page_switched.connect(self._on_page_switched)
        layout.addWidget(self.pager, stretch=1)

    def _create_label_page(self, index: int, title: str) -> QLabel:
        label = QLabel(title)
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        color = self.cfg.get_color(f"page{index}", "#333333")
        text = self.cfg.get_color("text", "#FFFFFF")
        font = self.cfg.get_font()
        label.setStyleSheet(
            f"background-color: {color}; color: {text}; font-family: {font}; font-size: 24px;"
        )
        return label

    def _create_list_page(self) -> QListWidget:
        lipsum = self.cfg.get_string("demo", "lipsum", "")
        count = self.cfg.get_ui_setting("demo", "listSize", 100)
        list_widget = QListWidget()
        list_widget.addItems(generate_words(lipsum, count))
        return list_widget

    def _on_tab_clicked(self, index: int) -> None:
        logger.debug("Tab %d clicked", index)
        self.pager.set_current_page(index, animate=True)

    def _on_page_switched(self, page: int) -> None:
        logger.debug("Pager switched to page %d", page)
        self._check_tab(page)

    def _check_tab(self, page: int) -> None:
        button = self.tab_group.button(page)
        if button is not None:
            button.setChecked(True)

    def closeEvent(self, event) -> None:
        self.settings.setValue(CURRENT_PAGE_KEY, self.pager.save_state())
        super().closeEvent(event)


def main() -> None:
    """Run the demo application."""
    setup_logging()
    app = QApplication(sys.argv)
    window = PagerDemoWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
