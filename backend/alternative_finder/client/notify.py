import logging
from dataclasses import dataclass, field
from typing import List, Literal

logger = logging.getLogger(__name__)

NoticeLevel = Literal["info", "success", "error"]

_LOG_LEVELS = {"info": logging.INFO, "success": logging.INFO, "error": logging.ERROR}


@dataclass
class Notice:
    level: NoticeLevel
    message: str


@dataclass
class Notifier:
    """Toast queue: keeps every notice shown to the user, oldest first."""
    notices: List[Notice] = field(default_factory=list)

    def _push(self, level: NoticeLevel, message: str) -> Notice:
        notice = Notice(level=level, message=message)
        self.notices.append(notice)
        logger.log(_LOG_LEVELS[level], "[%s] %s", level, message)
        return notice

    def info(self, message: str) -> Notice:
        return self._push("info", message)

    def success(self, message: str) -> Notice:
        return self._push("success", message)

    def error(self, message: str) -> Notice:
        return self._push("error", message)
