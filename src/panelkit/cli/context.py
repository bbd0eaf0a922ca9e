"""CLI context: settings resolution and the lazily created panel."""

from dataclasses import dataclass, field

from panelkit import PanelKit
from panelkit.core.settings import Settings


@dataclass
class CLIContext:
    """Shared context for CLI commands.

    Manages the panel lifecycle and output preferences. Values left as None
    fall back to ``PANELKIT_*`` environment variables, then to defaults.
    """

    database_url: str | None
    data_source_url: str | None
    echo: bool
    json_output: bool
    _panel: PanelKit | None = field(default=None, init=False, repr=False)

    def get_settings(self) -> Settings:
        return Settings.from_env(
            database_url=self.database_url,
            data_source_url=self.data_source_url,
            echo=self.echo or None,
        )

    def get_panel(self) -> PanelKit:
        """Get or create the panel (lazy initialization).

        Only panelkit's own storage is prepared; the data source is read on
        first schema access.
        """
        if self._panel is None:
            self._panel = PanelKit(self.get_settings())
            self._panel.setup()
        return self._panel

    def close(self) -> None:
        """Close the panel if open."""
        if self._panel is not None:
            self._panel.close()
            self._panel = None
