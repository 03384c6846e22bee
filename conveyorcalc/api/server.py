"""
FastAPI server for the belt conveyor calculator.

Provides REST API endpoints and a simple HTML UI. The endpoints are thin
wrappers over the pure calculation, shaft, tracking and gearmotor
functions; nothing is persisted.
"""

from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict

from conveyorcalc import __version__
from conveyorcalc.config import configure_logging, settings
from conveyorcalc.engine.calculator import MODEL_KEY, run_calculation
from conveyorcalc.errors import CatalogError
from conveyorcalc.gearmotor.bom import build_bom_copy_text
from conveyorcalc.gearmotor.models import (
    BomCopyContext,
    BomRequest,
    BomResolution,
    GearmotorSelectionInputs,
    GearmotorSelectionResult,
    OutputShaftOption,
)
from conveyorcalc.gearmotor.source import (
    JsonCatalogSource,
    resolve_bom_from_source,
    select_gearmotor_from_source,
)
from conveyorcalc.models.inputs import (
    BedType,
    BeltTrackingMethod,
    ConveyorInputs,
    FrameHeightMode,
    GearmotorMountingStyle,
    ShaftDiameterMode,
    ShaftSizingInputs,
    SideLoadingDirection,
    SideLoadingSeverity,
    SpeedMode,
    example_inputs,
)
from conveyorcalc.models.outputs import CalculationResult, ShaftSizingResult, TrackingGuidance
from conveyorcalc.physics.shaft import calculate_shaft_diameter
from conveyorcalc.rules.tracking import calculate_tracking_guidance

configure_logging()

# Create FastAPI app
app = FastAPI(
    title="Belt Conveyor Calculator API",
    description="""
    Sizing engine for belt conveyors: belt pull, drive torque, shaft
    diameters, tracking guidance and gearmotor selection.
    """,
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# HTML UI Template
HTML_UI = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Belt Conveyor Calculator</title>
    <style>
        * { box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
            background: #f5f5f5;
            color: #333;
        }
        h1 { color: #2c3e50; border-bottom: 3px solid #3498db; padding-bottom: 10px; }
        .container { display: flex; gap: 20px; flex-wrap: wrap; }
        .panel {
            flex: 1;
            min-width: 400px;
            background: white;
            padding: 20px;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        textarea, pre {
            width: 100%;
            height: 420px;
            font-family: 'Monaco', 'Menlo', monospace;
            font-size: 12px;
            padding: 10px;
            border: 1px solid #ddd;
            border-radius: 4px;
            overflow: auto;
        }
        button {
            padding: 12px 24px;
            font-size: 14px;
            cursor: pointer;
            border: none;
            border-radius: 4px;
            margin: 15px 10px 0 0;
        }
        .btn-primary { background: #3498db; color: white; }
        .btn-secondary { background: #95a5a6; color: white; }
    </style>
</head>
<body>
    <h1>Belt Conveyor Calculator</h1>
    <div class="container">
        <div class="panel">
            <h3>Inputs</h3>
            <textarea id="inputs"></textarea>
            <button class="btn-secondary" onclick="loadExample()">Load Example</button>
            <button class="btn-primary" onclick="calculate()">Calculate</button>
        </div>
        <div class="panel">
            <h3>Result</h3>
            <pre id="result"></pre>
        </div>
    </div>
    <script>
        async function loadExample() {
            const resp = await fetch('/example');
            const data = await resp.json();
            document.getElementById('inputs').value = JSON.stringify(data, null, 2);
        }

        async function calculate() {
            const resultEl = document.getElementById('result');
            try {
                const inputs = JSON.parse(document.getElementById('inputs').value);
                const resp = await fetch('/calculate', {
                    method: 'POST',
                    headers: {'Content-Type': 'application/json'},
                    body: JSON.stringify({inputs: inputs})
                });
                const data = await resp.json();
                resultEl.textContent = JSON.stringify(data, null, 2);
            } catch (e) {
                resultEl.textContent = 'Error: ' + e.message;
            }
        }

        loadExample();
    </script>
</body>
</html>
"""


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class CalculationRequest(BaseModel):
    """Request body for the calculate endpoint."""

    model_config = ConfigDict(protected_namespaces=())

    inputs: ConveyorInputs
    parameters: Optional[dict] = None
    model_key: Optional[str] = None


class TrackingRequest(BaseModel):
    """Request body for the tracking endpoint."""
    inputs: ConveyorInputs
    belt_speed_fpm: Optional[float] = None


class BomResponse(BaseModel):
    """BOM resolution plus clipboard text."""
    resolution: BomResolution
    copy_text: str


def _catalog_source() -> JsonCatalogSource:
    return JsonCatalogSource(settings.CATALOG_PATH)


@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the HTML UI."""
    return HTML_UI


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check if the API is running."""
    return HealthResponse(status="healthy", version=__version__)


@app.get("/example", response_model=ConveyorInputs, tags=["Reference"])
async def get_example():
    """Get an example input configuration."""
    return example_inputs()


@app.get("/enums", tags=["Reference"])
async def list_enums():
    """Canonical values of the main selection enums."""
    return {
        "bed_type": [e.value for e in BedType],
        "belt_tracking_method": [e.value for e in BeltTrackingMethod],
        "speed_mode": [e.value for e in SpeedMode],
        "gearmotor_mounting_style": [e.value for e in GearmotorMountingStyle],
        "shaft_diameter_mode": [e.value for e in ShaftDiameterMode],
        "frame_height_mode": [e.value for e in FrameHeightMode],
        "side_loading_direction": [e.value for e in SideLoadingDirection],
        "side_loading_severity": [e.value for e in SideLoadingSeverity],
        "output_shaft_option": [e.value for e in OutputShaftOption],
    }


@app.post("/calculate", response_model=CalculationResult, tags=["Calculation"])
async def calculate(request: CalculationRequest):
    """
    Validate and calculate one conveyor configuration.

    Validation errors are returned in the body with success=false, not as
    an HTTP error.
    """
    try:
        return run_calculation(
            request.inputs,
            parameters=request.parameters,
            model_key=request.model_key or MODEL_KEY,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/shaft", response_model=ShaftSizingResult, tags=["Calculation"])
async def size_shaft(inputs: ShaftSizingInputs):
    """Size one pulley shaft (von Mises with keyway factor on the drive)."""
    return calculate_shaft_diameter(inputs)


@app.post("/tracking", response_model=TrackingGuidance, tags=["Calculation"])
async def tracking(request: TrackingRequest):
    """Crowned vs V-guided tracking recommendation."""
    return calculate_tracking_guidance(request.inputs, request.belt_speed_fpm)


@app.post("/gearmotor/select", response_model=GearmotorSelectionResult, tags=["Gearmotor"])
async def select_gearmotor(inputs: GearmotorSelectionInputs):
    """
    Select gearmotor candidates from the catalog.

    An empty candidate list with a message is a normal response.
    """
    try:
        return await select_gearmotor_from_source(_catalog_source(), inputs)
    except CatalogError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/gearmotor/bom", response_model=BomResponse, tags=["Gearmotor"])
async def gearmotor_bom(request: BomRequest):
    """Resolve the BOM for a selected catalog row, with order copy text."""
    try:
        resolution = await resolve_bom_from_source(
            _catalog_source(),
            request.point,
            mounting_style=request.mounting_style,
            output_shaft_option=request.output_shaft_option,
            mounting_variant=request.mounting_variant,
        )
    except CatalogError as e:
        raise HTTPException(status_code=400, detail=str(e))

    context = BomCopyContext(
        applied_sf=request.applied_sf if request.applied_sf is not None else request.point.catalog_sf,
        catalog_sf=request.point.catalog_sf,
        catalog_page=request.point.catalog_page,
        motor_hp=request.point.motor_hp,
        had_multiple_matches=resolution.had_multiple_matches,
    )
    return BomResponse(resolution=resolution, copy_text=build_bom_copy_text(resolution, context))
