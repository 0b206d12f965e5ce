"""
Log Viewer Components Module - Header and footer control panels

Handles:
- Timestamp toggle, level and filter pickers, filter text
- Font size stepper, go-to-last toggle, refresh / load / open / save / clear
- Syncing widget values from settings without re-emitting change events
"""
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Checkbox, Input, Label, Select

from .log_parser import LogFilter, LogLevel
from .settings import LogViewSettings


class LogHeaderPanel(Horizontal):
    """Display filters: timestamps, level, filter kind and text"""

    def __init__(self, settings: LogViewSettings, **kwargs):
        super().__init__(**kwargs)
        self.settings = settings

    def compose(self) -> ComposeResult:
        """Compose the header panel, starting from the stored settings"""
        yield Checkbox("Show Timestamps", self.settings.show_timestamps, id="show-timestamps-checkbox")
        yield Label("[bold]Show Level:[/bold]", classes="control-label")
        yield Select(
            options=[(level.value, level.value) for level in LogLevel],
            value=self.settings.level.value,
            allow_blank=False,
            id="log-level-select",
        )
        yield Label("[bold]Filter by:[/bold]", classes="control-label")
        yield Select(
            options=[(kind.value, kind.value) for kind in LogFilter],
            value=self.settings.filter_kind.value,
            allow_blank=False,
            id="log-filter-select",
        )
        yield Button("✕", id="clear-filter-btn", variant="default")
        yield Input(self.settings.filter_text, placeholder="Filter text", id="log-filter-input")

    def sync(self, settings: LogViewSettings) -> None:
        """Show the given settings"""
        checkbox = self.query_one("#show-timestamps-checkbox", Checkbox)
        if checkbox.value != settings.show_timestamps:
            with checkbox.prevent(Checkbox.Changed):
                checkbox.value = settings.show_timestamps

        level_select = self.query_one("#log-level-select", Select)
        if level_select.value != settings.level.value:
            with level_select.prevent(Select.Changed):
                level_select.value = settings.level.value

        filter_select = self.query_one("#log-filter-select", Select)
        if filter_select.value != settings.filter_kind.value:
            with filter_select.prevent(Select.Changed):
                filter_select.value = settings.filter_kind.value

        filter_input = self.query_one("#log-filter-input", Input)
        if filter_input.value != settings.filter_text:
            with filter_input.prevent(Input.Changed):
                filter_input.value = settings.filter_text


class LogFooterPanel(Horizontal):
    """Font size, scroll anchor and file actions"""

    def compose(self) -> ComposeResult:
        """Compose the footer panel"""
        yield Label("Font Size", classes="control-label")
        yield Button("-", id="font-smaller-btn", variant="default")
        yield Label("12", id="font-size-label")
        yield Button("+", id="font-larger-btn", variant="default")
        yield Button("⬇ Go to Last", id="goto-last-btn", variant="default")
        yield Button("⟳ Refresh", id="refresh-btn", variant="primary")
        yield Checkbox("Auto Refresh", id="auto-refresh-checkbox")
        yield Button("Load", id="load-btn", variant="default")
        yield Button("Open…", id="open-btn", variant="default")
        yield Button("💾 Save", id="save-btn", variant="success")
        yield Button("Clear", id="clear-btn", variant="warning")

    def sync(self, settings: LogViewSettings, auto_refresh_active: bool) -> None:
        """Show the given settings and refresh state"""
        self.query_one("#font-size-label", Label).update(f"{settings.font_size:2.0f}")

        goto_button = self.query_one("#goto-last-btn", Button)
        goto_button.label = "⬆ Go to First" if settings.goto_last else "⬇ Go to Last"

        checkbox = self.query_one("#auto-refresh-checkbox", Checkbox)
        if checkbox.value != auto_refresh_active:
            with checkbox.prevent(Checkbox.Changed):
                checkbox.value = auto_refresh_active
