import os

from fastapi import Body, FastAPI, HTTPException, Request, Response
from loguru import logger
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from client import StoreClient, StoreError
from config import APP_VERSION
from csv_tools import CsvTools
from db import AsyncLoggedSetRepository, LoggedSetRepository, SettingsRepository
from entry_service import EntryService
from log_config import configure_logging
from models import EntryForm, LoggedSet
from stats_service import StatisticsService


class VolumeAPI:
    """Provides REST endpoints for logging sets and reading volume views."""

    def __init__(
        self,
        db_path: str = "workout.db",
        yaml_path: str = "settings.yaml",
        *,
        store=None,
    ) -> None:
        self.db_path = db_path
        self.settings = SettingsRepository(db_path, yaml_path)
        configure_logging(self.settings.get_text("log_level", "INFO"))
        self.async_sets: AsyncLoggedSetRepository | None = None
        self.store = store if store is not None else self._create_store()
        self.entries = EntryService(self.store, self.settings)
        self.statistics = StatisticsService(self.store)
        self.app = FastAPI(
            title="Volume API",
            description="REST API for workout set logging and volume statistics",
            version=APP_VERSION,
        )
        self._setup_routes()

    def _create_store(self):
        url = self.settings.get_text("store_url", "")
        if url:
            logger.info("Using hosted store at {}", url)
            return StoreClient(
                url,
                api_key=self.settings.get_text("store_api_key", ""),
                table=self.settings.get_text("store_table", "workout_raw_records"),
            )
        self.async_sets = AsyncLoggedSetRepository(self.db_path)
        return LoggedSetRepository(self.db_path)

    @staticmethod
    def _dump(records) -> list[dict]:
        return [r.model_dump(by_alias=True) for r in records]

    def _setup_routes(self) -> None:
        @self.app.exception_handler(StoreError)
        async def store_error_handler(request: Request, exc: StoreError):
            return Response(f"store unavailable: {exc}", status_code=502)

        @self.app.get("/health")
        def health():
            return {"status": "ok"}

        @self.app.get("/sets")
        async def list_sets():
            if self.async_sets is not None:
                records = await self.async_sets.fetch_sets()
            else:
                records = await run_in_threadpool(self.store.fetch_sets)
            return self._dump(records)

        @self.app.post("/sets")
        def add_sets(form: EntryForm):
            try:
                added = self.entries.submit(form)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return {"ids": [r.id for r in added]}

        @self.app.get("/sets/{set_id}")
        def get_set(set_id: str):
            try:
                record = self.store.fetch_detail(set_id)
            except ValueError as e:
                raise HTTPException(status_code=404, detail=str(e))
            return record.model_dump(by_alias=True)

        @self.app.put("/sets/{set_id}")
        def update_set(set_id: str, data: dict = Body(...)):
            try:
                record = LoggedSet(**data)
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=str(e))
            try:
                updated = self.store.update(set_id, record)
            except ValueError as e:
                raise HTTPException(status_code=404, detail=str(e))
            return updated.model_dump(by_alias=True)

        @self.app.delete("/sets/{set_id}")
        def delete_set(set_id: str):
            try:
                self.store.delete(set_id)
            except ValueError as e:
                raise HTTPException(status_code=404, detail=str(e))
            return {"status": "deleted"}

        @self.app.get("/exercises")
        def list_exercises():
            return self.statistics.exercise_names()

        @self.app.get("/exercises/{name}/best")
        def exercise_best(name: str):
            return self.statistics.previous_best(name)

        @self.app.post("/preview")
        def preview(form: EntryForm):
            return {"volume": self.entries.preview_volume(form)}

        @self.app.get("/volume")
        def volume_table():
            return [
                e.model_dump(by_alias=True) for e in self.statistics.volume_table()
            ]

        @self.app.get("/stats")
        def exercise_stats():
            return [s.model_dump() for s in self.statistics.exercise_stats()]

        @self.app.get("/series")
        def time_series(exercise: str):
            return [p.model_dump() for p in self.statistics.time_series(exercise)]

        @self.app.get("/export")
        def export_csv():
            data = CsvTools.export_sets(self.statistics.logged_sets())
            return Response(content=data, media_type="text/csv")

        @self.app.post("/import")
        async def import_csv(request: Request):
            body = await request.body()
            default_bw = self.settings.get_float("default_bodyweight", 60.0)
            try:
                records, skipped = CsvTools.import_sets(body.decode("utf-8"), default_bw)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            added = await run_in_threadpool(self.store.add_many, records) if records else []
            return {"imported": len(added), "skipped": skipped}


if __name__ == "__main__":
    import uvicorn

    api = VolumeAPI(
        db_path=os.environ.get("DB_PATH", "workout.db"),
        yaml_path=os.environ.get("YAML_PATH", "settings.yaml"),
    )
    uvicorn.run(api.app)
