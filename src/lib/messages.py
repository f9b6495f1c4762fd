"""
Localised header labels and date formatting

Message keys follow the "s5slide-header-<field>" naming of the slide show
header fields. Unknown languages fall back to English.
"""

from datetime import datetime
from typing import Dict


MESSAGES: Dict[str, Dict[str, str]] = {
    'en': {
        's5slide-header-title': 'Title',
        's5slide-header-subtitle': 'Subtitle',
        's5slide-header-footer': 'Footer',
        's5slide-header-subfooter': 'Subfooter',
        's5slide-header-author': 'Author',
    },
    'ru': {
        's5slide-header-title': 'Заголовок',
        's5slide-header-subtitle': 'Подзаголовок',
        's5slide-header-footer': 'Нижний колонтитул',
        's5slide-header-subfooter': 'Дополнительный нижний колонтитул',
        's5slide-header-author': 'Автор',
    },
}

MONTHS: Dict[str, list[str]] = {
    'en': [
        'January', 'February', 'March', 'April', 'May', 'June',
        'July', 'August', 'September', 'October', 'November', 'December',
    ],
    # genitive case, as used after a day number
    'ru': [
        'января', 'февраля', 'марта', 'апреля', 'мая', 'июня',
        'июля', 'августа', 'сентября', 'октября', 'ноября', 'декабря',
    ],
}


def message_get(key: str, language: str = 'en') -> str:
    """
    Look up a localised message.

    Returns the English text for unknown languages, and the key itself
    wrapped in angle quotes for unknown keys.
    """
    messages = MESSAGES.get(language, MESSAGES['en'])
    if key in messages:
        return messages[key]
    return MESSAGES['en'].get(key, f"⧼{key}⧽")


def timeanddate(timestamp: datetime, language: str = 'en') -> str:
    """
    Format a timestamp the way page footers show it.

    Example:
        >>> timeanddate(datetime(2026, 10, 19, 14, 5))
        '14:05, 19 October 2026'
    """
    months = MONTHS.get(language, MONTHS['en'])
    return (
        f"{timestamp.hour:02d}:{timestamp.minute:02d}, "
        f"{timestamp.day} {months[timestamp.month - 1]} {timestamp.year}"
    )
