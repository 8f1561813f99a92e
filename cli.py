import argparse
import datetime
import shutil

import pandas as pd
from loguru import logger

from algorithms import WeightConverter
from csv_tools import CsvTools
from models import EntryForm, SetDetail
from rest_api import VolumeAPI


def _print_frame(frame: pd.DataFrame) -> None:
    if frame.empty:
        print("(no data)")
        return
    print(frame.to_string(index=False))


def export_sets(db_path: str, yaml_path: str, out_path: str) -> int:
    api = VolumeAPI(db_path=db_path, yaml_path=yaml_path)
    records = api.statistics.logged_sets()
    with open(out_path, "w", encoding="utf-8", newline="") as f:
        f.write(CsvTools.export_sets(records))
    return len(records)


def import_sets(csv_path: str, db_path: str, yaml_path: str) -> int:
    """Import sets from a CSV file written by :func:`export_sets`."""
    api = VolumeAPI(db_path=db_path, yaml_path=yaml_path)
    with open(csv_path, encoding="utf-8") as f:
        text = f.read()
    records, skipped = CsvTools.import_sets(
        text, api.settings.get_float("default_bodyweight", 60.0)
    )
    added = api.store.add_many(records) if records else []
    if skipped:
        logger.warning("{} rows in {} were not imported", skipped, csv_path)
    return len(added)


def backup_db(db_path: str, backup_path: str) -> None:
    shutil.copy(db_path, backup_path)


def restore_db(backup_path: str, db_path: str) -> None:
    shutil.copy(backup_path, db_path)


def demo_data(db_path: str, yaml_path: str) -> None:
    """Populate the store with a demo session if it is empty."""
    api = VolumeAPI(db_path=db_path, yaml_path=yaml_path)
    if api.statistics.logged_sets():
        print("Store already contains sets")
        return
    today = datetime.date.today().isoformat()
    api.entries.submit(
        EntryForm(
            date=today,
            bodyweight="60",
            exercise="ダンベルチェストプレス",
            details=[
                SetDetail(load="35", reps="13", sets="2"),
                SetDetail(load="40", reps="10", sets="1"),
            ],
        )
    )
    api.entries.submit(
        EntryForm(
            date=today,
            bodyweight="60",
            exercise="懸垂",
            details=[SetDetail(load="0", reps="8", sets="3")],
        )
    )
    print("Demo data inserted")


def main() -> None:
    parser = argparse.ArgumentParser(description="Workout volume log")
    parser.add_argument("--db", default="workout.db")
    parser.add_argument("--yaml", default="settings.yaml")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("volume")
    sub.add_parser("stats")
    sub.add_parser("raw")

    series = sub.add_parser("series")
    series.add_argument("--exercise", required=True)

    exp = sub.add_parser("export")
    exp.add_argument("--out", default="workouts.csv")

    imp = sub.add_parser("import")
    imp.add_argument("--csv", required=True)

    bkp = sub.add_parser("backup")
    bkp.add_argument("--out", default="backup.db")

    rst = sub.add_parser("restore")
    rst.add_argument("--in", dest="src", default="backup.db")

    sub.add_parser("demo")

    conv = sub.add_parser("convert")
    conv.add_argument("--weight", type=float, required=True)
    conv.add_argument("--unit", choices=["kg", "lb"], required=True)

    serve = sub.add_parser("serve")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    args = parser.parse_args()

    if args.cmd in ("volume", "stats", "raw", "series"):
        stats = VolumeAPI(db_path=args.db, yaml_path=args.yaml).statistics
        if args.cmd == "volume":
            _print_frame(stats.volume_frame())
        elif args.cmd == "stats":
            _print_frame(stats.stats_frame())
        elif args.cmd == "raw":
            _print_frame(stats.raw_frame())
        else:
            _print_frame(stats.series_frame(args.exercise))
    elif args.cmd == "export":
        count = export_sets(args.db, args.yaml, args.out)
        print(f"Exported {count} sets to {args.out}")
    elif args.cmd == "import":
        count = import_sets(args.csv, args.db, args.yaml)
        print(f"Imported {count} sets")
    elif args.cmd == "backup":
        backup_db(args.db, args.out)
    elif args.cmd == "restore":
        restore_db(args.src, args.db)
    elif args.cmd == "demo":
        demo_data(args.db, args.yaml)
    elif args.cmd == "convert":
        if args.unit == "kg":
            print(f"{args.weight} kg = {WeightConverter.kg_to_lb(args.weight)} lb")
        else:
            print(f"{args.weight} lb = {WeightConverter.lb_to_kg(args.weight)} kg")
    elif args.cmd == "serve":
        import uvicorn

        api = VolumeAPI(db_path=args.db, yaml_path=args.yaml)
        uvicorn.run(api.app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
