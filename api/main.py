"""
FastAPI backend for Entry-Frame - exposes the frame builder and explode animator as a REST API.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field
from typing import Dict, List, Any
import sys
from pathlib import Path
import io
import csv

# Add project root to path to import entry_frame
sys.path.insert(0, str(Path(__file__).parent.parent))

from entry_frame import (
    DimensionConfig,
    ExplodeSettings,
    ConfigurationError,
    FrameScene,
    assemble,
)
from entry_frame.geometry import Member
from entry_frame.schedule import length_bins, member_schedule, schedule_summary


app = FastAPI(
    title="Entry-Frame API",
    description="Parametric entrance frame with exploded view",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class FrameParams(BaseModel):
    """Frame dimensions (meters)."""
    column_spacing: float = Field(0.6, gt=0.0, le=10.0, description="Column spacing along the span")
    structure_depth: float = Field(0.6, gt=0.0, le=10.0, description="Back row to front row")
    canopy_overhang: float = Field(0.6, gt=0.0, le=10.0, description="Canopy projection past the front row")
    main_height: float = Field(3.0, gt=0.0, le=20.0, description="Column height")
    canopy_height: float = Field(0.6, gt=0.0, le=10.0, description="Canopy post height")
    profile_size: float = Field(0.06, gt=0.0, le=1.0, description="Square profile side")
    column_count: int = Field(4, ge=2, le=12, description="Columns along the span")

    def to_config(self) -> DimensionConfig:
        return DimensionConfig(**self.model_dump())


class ExplodeRequest(BaseModel):
    """Dimensions plus how far to run the explode animation."""
    frame: FrameParams = Field(default_factory=FrameParams)
    exploded: bool = Field(True, description="Layout to chase")
    ticks: int = Field(60, ge=0, le=2000, description="Animation ticks to run")
    scale: List[float] = Field([1.2, 1.1, 1.5], min_length=3, max_length=3, description="Explode scale (x, y, z)")
    smoothing: float = Field(0.1, gt=0.0, le=1.0, description="Fraction of remaining distance per tick")


class MemberData(BaseModel):
    """One built member."""
    index: int
    role: str
    length: float
    cross_section: float
    orientation: List[float]
    assembled_position: List[float]
    current_position: List[float]


class FrameResult(BaseModel):
    """Complete frame build result."""
    n_members: int
    members: List[MemberData]
    length_bins: Dict[str, List[int]]
    summary: Dict[str, Dict[str, float]]
    params: Dict[str, Any]


class ExplodeResult(BaseModel):
    """Member positions after running the animation."""
    ticks: int
    exploded: bool
    residual: float
    settled: bool
    members: List[MemberData]


# =============================================================================
# Helpers
# =============================================================================

def _member_data(member: Member) -> MemberData:
    return MemberData(
        index=member.index,
        role=member.role,
        length=round(member.length, 6),
        cross_section=member.cross_section,
        orientation=[round(float(v), 6) for v in member.orientation],
        assembled_position=[round(float(v), 6) for v in member.assembled_position],
        current_position=[round(float(v), 6) for v in member.current_position],
    )


def build_frame(params: FrameParams) -> FrameResult:
    """Build a frame assembly and describe it."""
    try:
        assembly = assemble(params.to_config())
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    
    return FrameResult(
        n_members=len(assembly),
        members=[_member_data(m) for m in assembly.members],
        length_bins=length_bins(assembly),
        summary=schedule_summary(assembly),
        params=params.model_dump(),
    )


def run_explode(request: ExplodeRequest) -> ExplodeResult:
    """Build a scene and run the explode animation for a number of ticks."""
    try:
        settings = ExplodeSettings(scale=tuple(request.scale), smoothing=request.smoothing)
        scene = FrameScene(request.frame.to_config(), settings=settings, exploded=request.exploded)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    
    try:
        residual = scene.run(request.ticks)
        settled = scene.is_settled()
        members = [_member_data(m) for m in scene.members]
    finally:
        scene.teardown()
    
    return ExplodeResult(
        ticks=request.ticks,
        exploded=request.exploded,
        residual=residual,
        settled=settled,
        members=members,
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "Entry-Frame API"}


@app.post("/api/frame", response_model=FrameResult)
async def generate_frame(params: FrameParams):
    """Build a frame from dimensions."""
    return build_frame(params)


@app.post("/api/frame/explode", response_model=ExplodeResult)
async def explode_frame(request: ExplodeRequest):
    """Member positions after N ticks of the explode animation."""
    return run_explode(request)


@app.post("/api/export/csv")
async def export_csv(params: FrameParams):
    """Export member cut list as CSV."""
    try:
        assembly = assemble(params.to_config())
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(['index', 'role', 'length_m', 'length_mm', 'profile_mm'])
    
    for row in sorted(member_schedule(assembly), key=lambda r: (r['length'], r['index'])):
        writer.writerow([
            row['index'], row['role'],
            round(row['length'], 4), round(row['length'] * 1000, 1),
            round(row['profile'] * 1000, 1),
        ])
    
    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=frame_cutlist.csv"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
