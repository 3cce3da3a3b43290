"""Interactive multi-select picker.

Space toggles an entry, Enter confirms, Escape cancels. Blocks until the
operator does one or the other.
"""

from collections.abc import Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Label, SelectionList
from textual.widgets.selection_list import Selection

from fuzzkill.formatting import group_text, leaf_text
from fuzzkill.grouping import Choice, GroupChoice

TITLE = "Select processes to kill"


def choice_text(choice: Choice) -> Text:
    """Styled prompt for a choice."""
    if isinstance(choice, GroupChoice):
        return group_text(choice.name, len(choice.members))
    return leaf_text(choice.record)


class PickerApp(App[list[Choice]]):
    """Full-screen checklist of choices.

    Returns the selected choices in display order, or an empty list on
    cancel.
    """

    CSS = """
    #title {
        padding: 0 1;
        text-style: bold;
    }
    SelectionList {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("enter", "confirm", "Confirm", priority=True),
        Binding("escape", "cancel", "Cancel", priority=True),
    ]

    def __init__(self, choices: Sequence[Choice]) -> None:
        super().__init__()
        self.choices = list(choices)

    def compose(self) -> ComposeResult:
        yield Label(TITLE, id="title")
        yield SelectionList[int](
            *(Selection(choice_text(choice), index) for index, choice in enumerate(self.choices))
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(SelectionList).focus()

    @property
    def selected(self) -> list[Choice]:
        """Currently ticked choices, in display order."""
        indices = sorted(self.query_one(SelectionList).selected)
        return [self.choices[i] for i in indices]

    def action_confirm(self) -> None:
        self.exit(self.selected)

    def action_cancel(self) -> None:
        self.exit([])


def pick(choices: Sequence[Choice]) -> list[Choice]:
    """Let the operator pick among choices. Empty list means nothing picked."""
    if not choices:
        return []
    result = PickerApp(choices).run()
    return result or []
