from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from conditional_validation import ConfigurationError, DictRecord, RecordValidator
from conditional_validation.metrics import metrics_endpoint

app = FastAPI(title="Conditional Validator")


class RecordPayload(BaseModel):
    attributes: Dict[str, Any] = {}
    labels: Dict[str, str] = {}
    relations: Dict[str, Optional["RecordPayload"]] = {}


RecordPayload.model_rebuild()


class ValidateRequest(BaseModel):
    rules: List[Dict[str, Any]]
    record: RecordPayload
    scenario: Optional[str] = None
    attributes: Optional[List[str]] = None


@app.post("/validate")
async def validate(req: ValidateRequest):
    try:
        validator = RecordValidator(rules=req.rules)
        record = DictRecord.from_dict(req.record.model_dump())
        result = validator.validate(record, attributes=req.attributes, scenario=req.scenario)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "status": result.status.value,
        "processing_time_ms": result.processing_time_ms,
        "errors": [f.to_dict() for f in result.errors],
    }


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/metrics", response_class=PlainTextResponse)
async def metrics():
    return metrics_endpoint()
