from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from .animation import TURN_RADII, AnimatedPath
from .easing import EASINGS
from .events import ENDED
from .smoothing import generate_curved_path
import logging

log = logging.getLogger(__name__)


app = FastAPI(title="Path Motion API", version="1.0.0")


@app.get("/")
async def index():
    return {
        "name": app.title,
        "endpoints": ["/api/ping", "/api/easings", "/api/smooth", "/api/simulate"],
    }


class SmoothRequest(BaseModel):
    # (lat, lon) pairs
    path: List[Tuple[float, float]]
    radius: Optional[float] = Field(default=None, gt=0)
    turn: str = "normal"
    points_per_turn: int = Field(default=10, ge=1, le=200)


class SimulateRequest(BaseModel):
    path: List[Tuple[float, float]] = Field(min_length=1)
    closed: bool = False
    loop: bool = False
    speed: float = Field(default=0.0, ge=0)      # km/h
    duration: float = Field(default=0.0, ge=0)   # ms, wins over speed
    easing: str = "linear"
    turn: Optional[str] = None
    fps: float = Field(default=30.0, gt=0, le=240)
    frames: int = Field(default=60, ge=1, le=10000)


@app.get("/api/ping")
async def ping():
    return {"ok": True, "time": datetime.now(timezone.utc).isoformat()}


@app.get("/api/easings")
async def easings():
    return {"easings": sorted(EASINGS)}


@app.post("/api/smooth")
async def smooth(req: SmoothRequest):
    radius = req.radius
    if radius is None:
        radius = TURN_RADII.get(req.turn)
        if radius is None:
            log.warning("Unknown turn %r, using 'normal'", req.turn)
            radius = TURN_RADII["normal"]
    try:
        lon_lat = [(lon, lat) for lat, lon in req.path]
        smoothed = generate_curved_path(lon_lat, radius, req.points_per_turn) if lon_lat else []
        return {
            "path": [[float(lat), float(lon)] for lon, lat in smoothed],
            "radius": radius,
        }
    except Exception as e:
        log.exception("Smoothing failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/simulate")
async def simulate(req: SimulateRequest):
    try:
        options = {"easing": req.easing, "turn": req.turn}
        if req.duration > 0:
            options["duration"] = req.duration
        else:
            options["speed"] = req.speed

        obj = AnimatedPath(req.path, options, closed=req.closed, path_id="sim")
        obj.set_loop(req.loop)
        ended = []
        obj.on(ENDED, lambda evt: ended.append(len(ended)))
        obj.start()

        dt = 1.0 / req.fps
        samples = []
        for i in range(req.frames):
            if i > 0:
                obj.advance(dt)
            pos = obj.sample_position()
            samples.append({
                "t": i * dt,
                "lat": pos.lat,
                "lon": pos.lon,
                "heading": pos.heading,
                "progress": obj.progress,
            })
        return {
            "total_distance": obj.total_distance,
            "points": len(obj.path),
            "ended": len(ended),
            "samples": samples,
        }
    except Exception as e:
        log.exception("Simulation failed")
        raise HTTPException(status_code=500, detail=str(e))


def main():
    import uvicorn
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    uvicorn.run(app, host="127.0.0.1", port=int(os.getenv("PORT", 8002)))

if __name__ == "__main__":
    main()
