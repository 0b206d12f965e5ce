"""
Log Table Module - Colored display of the filtered lines
"""
from typing import Sequence

from rich.text import Text
from textual.widgets import RichLog

from .log_parser import LogLine


class LogLinesPanel(RichLog):
    """Scrollable, colored view of log lines"""

    def __init__(self, **kwargs):
        super().__init__(highlight=False, markup=False, wrap=False, auto_scroll=False, **kwargs)
        self.line_count = 0

    def show_lines(self, lines: Sequence[LogLine], goto_last: bool = False) -> None:
        """
        Replace the displayed lines

        Args:
            lines: Lines to display, in order
            goto_last: Anchor the view at the last line instead of the first
        """
        self.clear()
        for line in lines:
            self.write(Text(line.text, style=line.color.style))
        self.line_count = len(lines)
        self.anchor(goto_last)

    def anchor(self, goto_last: bool) -> None:
        """Scroll to the last line or the first"""
        if goto_last:
            self.scroll_end(animate=False)
        else:
            self.scroll_home(animate=False)
