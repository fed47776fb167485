import re

from sqlalchemy import Enum as SAEnum

_SEPARATORS = re.compile(r"[\s\-]+")


def _normalize(value: str) -> str:
    return _SEPARATORS.sub("_", value.strip().lower())


class CaseInsensitiveEnum(SAEnum):
    """Enum column storing member values, lenient about case and separators.

    ``"Live-In"``, ``"live in"`` and ``LivingArrangement.LIVE_IN`` all bind as
    ``"live_in"``.
    """

    def __init__(self, enum_cls, **kwargs):
        self._enum_cls = enum_cls
        self._enum_kwargs = kwargs.copy()
        kwargs.setdefault("values_callable", lambda enum: [e.value for e in enum])
        super().__init__(enum_cls, **kwargs)

    def adapt(self, impltype, **kw):
        params = {**self._enum_kwargs, **kw}
        return CaseInsensitiveEnum(self._enum_cls, **params)

    def bind_processor(self, dialect):
        parent = super().bind_processor(dialect)

        def process(value):
            if value is None:
                return None
            if isinstance(value, self._enum_cls):
                value = value.value
            elif isinstance(value, str):
                value = _normalize(value)
            if parent:
                return parent(value)
            return value

        return process

    def result_processor(self, dialect, coltype):
        parent = super().result_processor(dialect, coltype)

        def process(value):
            if value is None:
                return None
            if isinstance(value, str):
                value = _normalize(value)
            if parent:
                return parent(value)
            return value

        return process
