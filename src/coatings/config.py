from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CoatingsConfig:
    db_path: str = "coatings.db"
    pages_dir: str = "pages"
    applications_page: str = "MediaWiki:Coatings-applications.json"
    cache_ttl: float = 86400.0  # one day
    lock_wait: float = 3.0  # bounded wait for the fill lock
    lock_ttl: float = 30.0  # a held lock expires after this long
    lock_poll: float = 0.05
    template_css_model: bool = False  # Template:*.css pages default to CSS
    expose_application_id: bool = True
    skins: tuple[str, ...] = ()  # empty means every skin
    interwiki_prefixes: tuple[str, ...] = ("wikipedia", "commons", "meta")
    host: str = "127.0.0.1"
    port: int = 5000

    def skin_allowed(self, skin: str | None) -> bool:
        if not self.skins or skin is None:
            return True
        return skin.lower() in {s.lower() for s in self.skins}
