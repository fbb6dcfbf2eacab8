"""Path management for a Timelog-enabled vault."""

from pathlib import Path


class VaultPaths:
    """Manages paths Timelog reads and writes inside a notes vault."""

    def __init__(self, vault_root: Path):
        """Initialize vault paths from root directory.

        Args:
            vault_root: Root directory of the notes vault
        """
        self.root = vault_root

        # Editor settings owned by the host application
        self.obsidian = vault_root / ".obsidian"
        self.daily_notes_settings = self.obsidian / "daily-notes.json"

        # Timelog state
        self.system = vault_root / ".timelog"
        self.config_file = self.system / "config.toml"
        self.ledger_file = self.system / "ledger.jsonl"

    def get_all_directories(self) -> list[Path]:
        """Get list of directories Timelog creates on demand."""
        return [self.system]

    def relative(self, path: Path) -> str:
        """Render a document path relative to the vault root when possible."""
        try:
            return str(path.resolve().relative_to(self.root.resolve()))
        except ValueError:
            return str(path)
