from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SessionContext:
    access_token: str | None = None
    theme: str = "system"
    actor: str | None = None

    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def toggle_theme(self) -> "SessionContext":
        return replace(self, theme="light" if self.theme == "dark" else "dark")
