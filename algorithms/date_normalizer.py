import re


class DateNormalizer:
    """Canonicalize logged dates into sortable ``YYYY-MM-DD`` keys."""

    SEPARATORS = "./-"
    _PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$", re.ASCII)
    _ISO = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)

    @classmethod
    def normalize(cls, date_text: str, strict: bool = False) -> str:
        """Return ``date_text`` as ``YYYY-MM-DD``.

        ``.``, ``/`` and ``-`` are accepted as separators and month/day may
        have one or two digits. Text that does not match is returned trimmed
        but otherwise unchanged, so historical rows with odd dates still show
        up; pass ``strict=True`` to get a ``ValueError`` instead.
        """
        text = date_text.strip()
        if cls.is_iso(text):
            return text
        for sep in cls.SEPARATORS:
            text = text.replace(sep, "-")
        match = cls._PATTERN.match(text)
        if match is None:
            if strict:
                raise ValueError(f"unrecognized date: {date_text!r}")
            return date_text.strip()
        year, month, day = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    @classmethod
    def is_iso(cls, date_text: str) -> bool:
        return cls._ISO.match(date_text) is not None
