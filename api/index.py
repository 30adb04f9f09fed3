from contextlib import asynccontextmanager
import logging
import os
from pathlib import Path
import sys
import threading

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Ensure local src package is importable in serverless runtime.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import addr_lens  # noqa: E402
from addr_lens.config import EngineConfig  # noqa: E402
from addr_lens.engines import LibpostalEngine  # noqa: E402
from addr_lens.engines.base import BaseEngine  # noqa: E402
from addr_lens.exceptions import EngineError, ReplacementLengthError  # noqa: E402
from addr_lens.schema import ComponentField, ParsedComponents  # noqa: E402

logger = logging.getLogger(__name__)

raw_origins = os.getenv("FRONTEND_ORIGINS", "*")
allow_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
MAX_BATCH_SIZE = int(os.getenv("MAX_BATCH_SIZE", "100000"))

# The engine handle is shared; batches run one at a time.
ENGINE_LOCK = threading.Lock()


def _create_engine() -> BaseEngine:
    return LibpostalEngine(config=EngineConfig.from_env())


@asynccontextmanager
async def lifespan(app: FastAPI):
    addr_lens.setup(_create_engine())
    try:
        yield
    finally:
        addr_lens.teardown()


app = FastAPI(title="addr-lens API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AddressBatchRequest(BaseModel):
    addresses: list[str | None] = Field(max_length=MAX_BATCH_SIZE)


class SetComponentRequest(AddressBatchRequest):
    replacement: str | list[str | None] | None


class AddressBatchResponse(BaseModel):
    results: list[str | None]


class ParseResponse(BaseModel):
    results: list[ParsedComponents]


def _field(name: str) -> ComponentField:
    try:
        return ComponentField.coerce(name)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=f"unknown component: {name}") from exc


def _run(operation, *args):
    try:
        with ENGINE_LOCK:
            return operation(*args)
    except ReplacementLengthError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except EngineError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("address batch failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@app.post("/normalize", response_model=AddressBatchResponse)
def normalize(body: AddressBatchRequest) -> AddressBatchResponse:
    results = _run(addr_lens.normalize_addr, body.addresses)
    return AddressBatchResponse(results=results)


@app.post("/parse", response_model=ParseResponse)
def parse(body: AddressBatchRequest) -> ParseResponse:
    table = _run(addr_lens.parse_addr, body.addresses)
    records = table.to_dict(orient="records")
    return ParseResponse(results=[ParsedComponents(**record) for record in records])


@app.post("/components/{field}", response_model=AddressBatchResponse)
def get_component(field: str, body: AddressBatchRequest) -> AddressBatchResponse:
    component = _field(field)
    results = _run(addr_lens.get_component, body.addresses, component)
    return AddressBatchResponse(results=results)


@app.put("/components/{field}", response_model=AddressBatchResponse)
def set_component(field: str, body: SetComponentRequest) -> AddressBatchResponse:
    component = _field(field)
    results = _run(addr_lens.set_component, body.addresses, component, body.replacement)
    return AddressBatchResponse(results=results)
