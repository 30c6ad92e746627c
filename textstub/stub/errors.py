# textstub/stub/errors.py
"""
textstub.stub.errors
====================

Канонические исключения кодеков TBD.

Каждая ошибка несёт:
- ``kind``    – машинно-обрабатываемая категория (FormatMismatch / SchemaError / ...);
- ``path``    – путь до проблемного поля документа, например ``exports[1].archs``;
- ``message`` – человекочитаемое пояснение;
- ``hints``   – (опционально) подсказки, например допустимые значения enum-а;
- ``cause``   – (опционально) исходное исключение (ошибка PyYAML, ValueError …).

Таксономия
----------
=====================  ==========================================================
класс                  когда
=====================  ==========================================================
FormatMismatch         буфер не прошёл детекцию / корневой тег не тот
SchemaError            синтаксис YAML, неверная форма узла (не dict / не list …)
MissingField           отсутствует обязательное поле
InvalidValue           некорректное скалярное значение (версия, платформа, флаг …)
UnsupportedWrite       запись запрошена для артефакта другого формата/типа
=====================  ==========================================================

Модуль не импортирует ничего из textstub, чтобы избежать циклических импортов.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Union


# =============================================================================
# StubPath: путь до поля документа
# =============================================================================

PathSegment = Union[str, int]

_PLAIN_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


@dataclass(frozen=True)
class StubPath:
    """
    Неизменяемый путь до поля TBD-документа.

        StubPath.root().key("exports").index(1).key("archs")  ->  "exports[1].archs"

    Ключи TBD содержат дефис (``install-name``, ``objc-classes``) – такие ключи
    печатаются через точку без экранирования; всё остальное – в форме ["..."].
    """

    segments: Tuple[PathSegment, ...] = ()

    @staticmethod
    def root() -> "StubPath":
        return StubPath(())

    def key(self, name: str) -> "StubPath":
        return StubPath(self.segments + (str(name),))

    def index(self, i: int) -> "StubPath":
        return StubPath(self.segments + (int(i),))

    def to_string(self) -> str:
        out: List[str] = []
        for seg in self.segments:
            if isinstance(seg, int):
                out.append(f"[{seg}]")
            elif _PLAIN_KEY_RE.match(seg):
                out.append(("." if out else "") + seg)
            else:
                escaped = seg.replace("\\", "\\\\").replace('"', '\\"')
                out.append(f'["{escaped}"]')
        return "".join(out)

    def __str__(self) -> str:  # pragma: no cover
        return self.to_string()


def path_to_str(path: Union[str, StubPath, None]) -> str:
    """StubPath | str | None -> str (None трактуем как корень)."""
    if path is None:
        return ""
    if isinstance(path, StubPath):
        return path.to_string()
    return str(path)


# =============================================================================
# StubError и подклассы
# =============================================================================

class StubError(ValueError):
    """
    Базовая ошибка чтения/записи TBD.

    Подклассы задают ``KIND``; явный ``kind=`` в конструкторе нужен только
    самому базовому классу.
    """

    KIND: ClassVar[str] = "StubError"

    def __init__(
        self,
        *,
        path: Union[str, StubPath, None] = None,
        message: str,
        kind: Optional[str] = None,
        hints: Optional[Sequence[str]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.path: str = path_to_str(path)
        self.kind: str = str(kind or self.KIND)
        self.message: str = str(message)
        self.hints: List[str] = [str(h) for h in (hints or ()) if str(h)]
        self.cause: Optional[BaseException] = cause
        super().__init__(self._format())

    def _format(self) -> str:
        """
        Пример:
            [MissingField] install-name: обязательное поле отсутствует
        """
        loc = f"{self.path}: " if self.path else ""
        base = f"[{self.kind}] {loc}{self.message}"
        if self.hints:
            base += f" Hints: {self.hints}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly представление (для логов/отчётов)."""
        out: Dict[str, Any] = {
            "kind": self.kind,
            "path": self.path,
            "message": self.message,
        }
        if self.hints:
            out["hints"] = list(self.hints)
        if self.cause is not None:
            out["cause"] = repr(self.cause)
        return out


class FormatMismatch(StubError):
    """Буфер не является документом этого формата/версии (кодек «отказывается»)."""

    KIND = "FormatMismatch"


class SchemaError(StubError):
    """Ошибка структуры документа: синтаксис YAML, неверный тип узла."""

    KIND = "SchemaError"


class MissingField(SchemaError):
    """Обязательное поле отсутствует."""

    KIND = "MissingField"


class InvalidValue(SchemaError):
    """Значение поля имеет правильную форму, но не проходит разбор."""

    KIND = "InvalidValue"


class UnsupportedWrite(StubError):
    """Запись запрошена для артефакта, который этот кодек не пишет."""

    KIND = "UnsupportedWrite"


__all__ = [
    "PathSegment",
    "StubPath",
    "path_to_str",
    "StubError",
    "FormatMismatch",
    "SchemaError",
    "MissingField",
    "InvalidValue",
    "UnsupportedWrite",
]
