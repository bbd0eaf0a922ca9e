"""Entity visibility selection."""

from __future__ import annotations

from collections.abc import Callable, Sequence

SAVE_BUTTON_TEXT = "Save Changes"


class EntitiesSelection:
    """Local state of a hide/show list.

    ``selection`` holds the hidden names. It is seeded from the persisted
    hidden list and reseeded by ``sync`` only when that list changes, so
    unsaved toggles survive a refresh that returns the same value.
    """

    def __init__(
        self,
        all_list: Sequence[str],
        hidden_list: Sequence[str],
        on_submit: Callable[[list[str]], None],
        get_label: Callable[[str], str] | None = None,
        description: str = "",
    ) -> None:
        self.all_list = list(all_list)
        self.on_submit = on_submit
        self.get_label = get_label or (lambda name: name)
        self.description = description
        self.touched = False
        self.is_making_request = False
        self._hidden_list = list(hidden_list)
        self.selection = list(hidden_list)

    def sync(self, hidden_list: Sequence[str], all_list: Sequence[str] | None = None) -> None:
        """Take in refreshed data."""
        if all_list is not None:
            self.all_list = list(all_list)
        hidden_list = list(hidden_list)
        if hidden_list != self._hidden_list:
            self._hidden_list = hidden_list
            self.selection = list(hidden_list)

    def is_hidden(self, name: str) -> bool:
        return name in self.selection

    def toggle(self, name: str) -> None:
        self.touched = True
        if name in self.selection:
            self.selection.remove(name)
        else:
            self.selection.append(name)

    @property
    def can_submit(self) -> bool:
        return self.touched and not self.is_making_request

    def submit(self) -> None:
        """Hand the current hidden list to ``on_submit``."""
        self.is_making_request = True
        try:
            self.on_submit(list(self.selection))
        finally:
            self.is_making_request = False
        self.touched = False

    def items(self) -> list[dict[str, object]]:
        """Rows to render: name, label and whether the entity is shown."""
        return [
            {"name": name, "label": self.get_label(name), "selected": not self.is_hidden(name)}
            for name in self.all_list
        ]
