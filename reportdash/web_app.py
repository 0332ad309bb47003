from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import load_config
from .errors import InvalidInputError, PipelineError
from .kpis import build_kpis
from .pipeline import build_dataset, run_batch, save_result
from .report_store import ReportStore
from .transform import to_chart_dataset


class ReportRequest(BaseModel):
    records: List[Dict[str, Any]]
    fileName: Optional[str] = None


class SelectRequest(BaseModel):
    index: int


def create_app(store: Optional[ReportStore] = None, extractor=None) -> FastAPI:
    app = FastAPI(title="reportdash")
    config = load_config()
    log_dir = Path(config.run_log_dir)
    if store is None:
        store = ReportStore(
            Path(config.report_store_path), max_reports=config.max_reports, log_dir=log_dir
        )

    def _state() -> Dict[str, Any]:
        return {
            "reports": store.get_reports(),
            "currentIndex": store.get_current_index(),
            "count": store.get_report_count(),
            "canNavigatePrev": store.can_navigate_prev(),
            "canNavigateNext": store.can_navigate_next(),
        }

    def _current() -> Dict[str, Any]:
        report = store.get_current_report()
        if report is None:
            raise HTTPException(status_code=404, detail="No report selected")
        return report

    @app.get("/api/reports")
    def list_reports():
        return JSONResponse(_state())

    @app.get("/api/reports/current")
    def current_report():
        return JSONResponse(_current())

    @app.get("/api/reports/current/dataset")
    def current_dataset():
        return JSONResponse(to_chart_dataset(_current()["extractedData"] or {}))

    @app.get("/api/reports/current/kpis")
    def current_kpis():
        return JSONResponse({"kpis": build_kpis(_current()["extractedData"] or {})})

    @app.post("/api/reports")
    def create_report(payload: ReportRequest):
        try:
            extracted_data, is_merged = build_dataset(payload.records)
        except InvalidInputError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        result = {
            "fileName": payload.fileName,
            "companyName": extracted_data["companyName"],
            "fiscalYear": extracted_data["fiscalYear"],
            "extractedData": extracted_data,
            "isMerged": is_merged,
        }
        if is_merged:
            result["fiscalYears"] = list(extracted_data["years"])
        report = save_result(store, result)
        return JSONResponse({"report": report, "dataset": to_chart_dataset(extracted_data)})

    @app.post("/api/upload")
    async def upload_reports(files: List[UploadFile] = File(...)):
        if extractor is None:
            raise HTTPException(status_code=400, detail="Extraction backend not configured")
        pdfs = []
        for f in files:
            filename = (f.filename or "").strip()
            if not filename.lower().endswith(".pdf"):
                continue
            pdfs.append((filename, await f.read()))
        if not pdfs:
            raise HTTPException(status_code=400, detail="Please upload a PDF file")
        try:
            result = await run_in_threadpool(
                run_batch, pdfs, extractor, max_files=config.batch_max_files, log_dir=log_dir
            )
        except PipelineError as exc:
            raise HTTPException(
                status_code=502,
                detail={"error": str(exc), "statuses": exc.statuses},
            )
        except InvalidInputError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        report = save_result(store, result)
        return JSONResponse({"report": report, "statuses": result["statuses"]})

    @app.post("/api/reports/select")
    def select_report(payload: SelectRequest):
        if not store.set_current_index(payload.index):
            raise HTTPException(status_code=404, detail="Report not found")
        return JSONResponse(_state())

    @app.post("/api/reports/prev")
    def previous_report():
        moved = store.navigate_prev()
        return JSONResponse(dict(_state(), moved=moved))

    @app.post("/api/reports/next")
    def next_report():
        moved = store.navigate_next()
        return JSONResponse(dict(_state(), moved=moved))

    @app.delete("/api/reports/{index}")
    def delete_report(index: int):
        if not store.delete_report(index):
            raise HTTPException(status_code=404, detail="Report not found")
        return JSONResponse(_state())

    @app.delete("/api/reports")
    def clear_reports():
        store.clear_reports()
        return JSONResponse(_state())

    return app


app = create_app()
