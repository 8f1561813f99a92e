import csv
import io
from typing import Iterable, List, Tuple

from loguru import logger
from pydantic import ValidationError

from models import LoggedSet

CSV_HEADER = ["date", "weight", "exercise", "load", "reps", "sets", "comment"]


class CsvTools:
    """Import and export logged sets in the tracker's CSV layout."""

    @staticmethod
    def export_sets(records: Iterable[LoggedSet]) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for r in records:
            writer.writerow(
                [
                    r.date,
                    r.bodyweight,
                    r.exercise,
                    r.load,
                    r.reps,
                    r.set_count,
                    r.comment,
                ]
            )
        return output.getvalue()

    @staticmethod
    def import_sets(
        text: str, default_bodyweight: float = 60.0
    ) -> Tuple[List[LoggedSet], int]:
        """Parse CSV ``text`` and return ``(sets, skipped_row_count)``."""
        reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
        missing = [c for c in CSV_HEADER[:-1] if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"missing CSV columns: {', '.join(missing)}")
        records: list[LoggedSet] = []
        skipped = 0
        for line_no, row in enumerate(reader, start=2):
            if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                continue
            weight = (row.get("weight") or "").strip()
            comment = row.get("comment") or ""
            if row.get(None):
                # unquoted commas in the trailing comment column
                comment = ",".join([comment, *row[None]])
            try:
                records.append(
                    LoggedSet(
                        date=row.get("date") or "",
                        weight=float(weight) if weight else default_bodyweight,
                        exercise=row.get("exercise") or "",
                        load=float(row.get("load") or ""),
                        reps=int(row.get("reps") or ""),
                        sets=int(row.get("sets") or ""),
                        comment=comment,
                    )
                )
            except (ValueError, ValidationError) as e:
                skipped += 1
                logger.warning("Skipping CSV line {}: {}", line_no, e)
        logger.info("Parsed {} sets from CSV, skipped {}", len(records), skipped)
        return records, skipped
