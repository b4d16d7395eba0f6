import argparse
import logging
from functools import lru_cache
from typing import Dict, List, Optional
from urllib.parse import urlparse

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

import config
from opdi.port_info import PortInfo
from opdi.property_codec import format_properties
from opdi.property_parser import parse_properties
from opdi.units_loader import UnitConfigError, UnitRegistry

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger("app")


# =================== Models ===================

class ParseRequest(BaseModel):
    text: str


class ParseResponse(BaseModel):
    properties: Dict[str, str]


class FormatRequest(BaseModel):
    properties: Dict[str, str]


class FormatResponse(BaseModel):
    text: str


class PortDescribeRequest(BaseModel):
    port_id: str
    extended_info: str = ""


class PortDescribeResponse(BaseModel):
    port_id: str
    unit: Optional[str] = None
    group: Optional[str] = None
    unit_label: str
    properties: Dict[str, str]


class UnitFormatEntry(BaseModel):
    name: str
    label: str


class UnitResponse(BaseModel):
    unit: str
    formats: List[UnitFormatEntry]


class UnitValueRequest(BaseModel):
    value: int


class UnitValueResponse(BaseModel):
    formatted: str
    input_value: str
    label: str


# =================== Application ===================

app = FastAPI(
    title="OPDI property API",
    description="Decodes and encodes OPDI property strings and formats port values",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_registry() -> UnitRegistry:
    try:
        return UnitRegistry.from_yaml(config.UNITS_CONFIG_PATH)
    except UnitConfigError as e:
        logger.warning(f"Unit configuration unavailable, continuing without units: {e}")
        return UnitRegistry()


@app.post("/properties/parse", response_model=ParseResponse)
async def parse_endpoint(request: ParseRequest):
    return {"properties": parse_properties(request.text)}


@app.post("/properties/format", response_model=FormatResponse)
async def format_endpoint(request: FormatRequest):
    try:
        return {"text": format_properties(request.properties)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/ports/describe", response_model=PortDescribeResponse)
async def describe_port(request: PortDescribeRequest, registry: UnitRegistry = Depends(get_registry)):
    port = PortInfo(request.port_id, request.extended_info)
    try:
        unit_format = registry.default_format(port.unit)
    except UnitConfigError as e:
        logger.error(f"Port {port.port_id}: invalid unit configuration: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return {
        "port_id": port.port_id,
        "unit": port.unit,
        "group": port.group,
        "unit_label": unit_format.label,
        "properties": port.properties,
    }


def _formats_or_error(registry: UnitRegistry, unit: str):
    if not registry.has_unit(unit):
        raise HTTPException(status_code=404, detail=f"Unknown unit: {unit}")
    try:
        return registry.formats_for(unit)
    except ValueError as e:
        logger.error(f"Invalid definition for unit {unit}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/units/{unit}", response_model=UnitResponse)
async def get_unit(unit: str, registry: UnitRegistry = Depends(get_registry)):
    formats = _formats_or_error(registry, unit)
    return {"unit": unit, "formats": [{"name": f.name, "label": f.label} for f in formats]}


@app.post("/units/{unit}/format", response_model=UnitValueResponse)
async def format_unit_value(unit: str, request: UnitValueRequest, registry: UnitRegistry = Depends(get_registry)):
    formats = _formats_or_error(registry, unit)
    unit_format = formats[0] if formats else registry.default_format(None)
    try:
        return {
            "formatted": unit_format.format(request.value),
            "input_value": unit_format.format_input(request.value),
            "label": unit_format.label,
        }
    except (ValueError, TypeError, OverflowError, OSError) as e:
        # bad formatString or timestamp out of range
        logger.error(f"Formatting {request.value} as {unit_format.name} failed: {e}", exc_info=True)
        raise HTTPException(status_code=400, detail=f"Cannot format value: {e}")


# =================== Server ===================

def start_api_server():
    api_url = urlparse(config.API_BASE_URL)
    default_port = api_url.port or 8000

    parser = argparse.ArgumentParser(description="Run the OPDI property API server")
    parser.add_argument("-H", "--host", default="0.0.0.0", help="Host to bind (default: 0.0.0.0)")
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=default_port,
        help=f"Port to listen on (default: {default_port}, from config.py)",
    )
    parser.add_argument("--reload", action="store_true", help="Enable auto reload (development)")
    args = parser.parse_args()

    print(f"Starting API server: http://{args.host}:{args.port}")
    print("Press Ctrl+C to stop")

    uvicorn.run("app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    start_api_server()
