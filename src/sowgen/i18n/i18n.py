import json
import logging
from datetime import date
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"


class I18nManager:
    """Fixed document labels and CLI messages, per locale."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(I18nManager, cls).__new__(cls)
            cls._instance._init()
        return cls._instance

    def _init(self) -> None:
        self.locale = DEFAULT_LOCALE
        self.locales_dir = Path(__file__).parent.parent / "locales"
        self.strings: Dict[str, Dict[str, str]] = {}
        self._load_all()

    def _load_all(self) -> None:
        for file in sorted(self.locales_dir.glob("*.json")):
            try:
                self.strings[file.stem] = json.loads(file.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Failed to load locale %s: %s", file.name, e)

    def set_locale(self, locale: str) -> None:
        if locale not in self.strings:
            logger.warning("Unknown locale '%s', labels fall back to %s", locale, DEFAULT_LOCALE)
        self.locale = locale

    def get_available_locales(self) -> list[str]:
        return sorted(self.strings.keys())

    def t(self, key: str, **values: str) -> str:
        """
        Label for `key` in the current locale, falling back to en-US and then
        to the key itself. Keyword arguments fill `{name}` fields.
        """
        for locale in (self.locale, DEFAULT_LOCALE):
            text = self.strings.get(locale, {}).get(key)
            if text is not None:
                return text.format(**values) if values else text
        return key

    def date(self, d: date) -> str:
        return d.strftime(self.t("date_format"))


i18n = I18nManager()
