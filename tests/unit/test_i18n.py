from datetime import date

from sowgen.i18n.i18n import i18n


def test_locales_loaded():
    assert i18n.get_available_locales() == ["en-US", "zh-TW"]

def test_translate_with_values():
    assert i18n.t("log_success", file="a.docx") == "Exported a.docx"
    i18n.set_locale("zh-TW")
    assert i18n.t("log_success", file="a.docx") == "已匯出 a.docx"

def test_unknown_locale_and_key_fall_back():
    i18n.set_locale("fr-FR")
    assert i18n.t("toc_heading") == "Table of Contents"
    assert i18n.t("no_such_key") == "no_such_key"

def test_localized_date():
    assert i18n.date(date(2024, 12, 1)) == "12/01/2024"
    i18n.set_locale("zh-TW")
    assert i18n.date(date(2024, 12, 1)) == "2024/12/01"
