"""
FastAPI service for event time conversion and multi-city timelines.

This service exposes the logic behind timeline_server/server.py as REST API
endpoints. All operations are pure computations over the request body, so
the service keeps no state between calls.
"""
from __future__ import annotations

import os
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException
from loguru import logger

from services.shared.models import (
    BuildTimelineRequest,
    BuildTimelineResponse,
    CityTimeline,
    ConvertedWindow,
    ConvertLocalEventRequest,
    FormatRangeRequest,
    FormatRangeResponse,
    LayoutMarker,
    ShowTimelineResponse,
    TimeDifferenceRequest,
    TimeDifferenceResponse,
    TimelineLayoutResponse,
    TimelineLayoutView,
)
from timeline.layout import build_layout
from timeline_server.server import (
    _convert_local_event_time,
    _describe_time_difference,
    _format_event_time_range,
    format_city_timeline,
    timeline_for,
    timeline_to_view,
)
from zonetime.cities import PALETTE
from zonetime.lookup import zone_identifier
from zonetime.logger import configure_logging

TIMELINE_SERVICE_PORT = int(os.getenv("TIMELINE_SERVICE_PORT", "8004"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    configure_logging()
    logger.info("Timeline service starting")
    yield
    logger.info("Timeline service stopped")


app = FastAPI(
    title="Timeline Service",
    description="REST API for event time conversion and multi-city timelines",
    version="1.0.0",
    lifespan=lifespan,
)


def _bad_request(e: ValueError) -> HTTPException:
    logger.warning("Rejected request: {}", e)
    return HTTPException(status_code=400, detail=str(e))


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "timeline-service"}


@app.post("/time/convert-local", response_model=ConvertedWindow)
async def convert_local(request: ConvertLocalEventRequest) -> ConvertedWindow:
    """
    Convert a local-time event window into the user's timezone.
    """
    try:
        result = _convert_local_event_time(
            request.start, request.end, request.city_timezone, request.user_timezone
        )
        return ConvertedWindow(**asdict(result))
    except ValueError as e:
        raise _bad_request(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error converting event time: {str(e)}")


@app.post("/time/format-range", response_model=FormatRangeResponse)
async def format_range(request: FormatRangeRequest) -> FormatRangeResponse:
    try:
        formatted = _format_event_time_range(
            request.start, request.end, request.is_global_time, request.timezone, request.include_date
        )
        return FormatRangeResponse(formatted=formatted)
    except ValueError as e:
        raise _bad_request(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error formatting time range: {str(e)}")


@app.post("/time/difference", response_model=TimeDifferenceResponse)
async def time_difference(request: TimeDifferenceRequest) -> TimeDifferenceResponse:
    try:
        description = _describe_time_difference(request.from_timezone, request.to_timezone, request.at)
        return TimeDifferenceResponse(description=description)
    except ValueError as e:
        raise _bad_request(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error describing time difference: {str(e)}")


@app.post("/timeline/build", response_model=BuildTimelineResponse)
async def build(request: BuildTimelineRequest) -> BuildTimelineResponse:
    """
    Build the chronological timeline of one event across the requested cities.

    Cities with unknown timezones are left out; ``timeline`` is null when no
    city remains.
    """
    try:
        timeline = timeline_for(
            request.start,
            request.end,
            request.is_global_time,
            request.cities,
            request.user_timezone,
            request.event_name,
        )
        if timeline is None:
            return BuildTimelineResponse(timeline=None)
        view = timeline_to_view(timeline, request.event_name)
        return BuildTimelineResponse(timeline=CityTimeline(**asdict(view)))
    except ValueError as e:
        raise _bad_request(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error building timeline: {str(e)}")


@app.post("/timeline/layout", response_model=TimelineLayoutResponse)
async def layout(request: BuildTimelineRequest) -> TimelineLayoutResponse:
    """
    Compute the chart geometry of a timeline: padded range, ticks and lanes.
    """
    try:
        timeline = timeline_for(
            request.start,
            request.end,
            request.is_global_time,
            request.cities,
            request.user_timezone,
            request.event_name,
        )
        chart = build_layout(timeline)
        if chart is None:
            return TimelineLayoutResponse(layout=None)

        markers = [
            LayoutMarker(
                city_id=marker.entry.city_id,
                city_name=marker.entry.city_name,
                start=marker.entry.start.isoformat(),
                end=marker.entry.end.isoformat(),
                lane=marker.lane,
                palette_index=marker.palette_index,
                color=PALETTE[marker.palette_index],
                start_progress=chart.progress(marker.entry.start),
                end_progress=chart.progress(marker.entry.end),
            )
            for marker in chart.markers
        ]
        return TimelineLayoutResponse(layout=TimelineLayoutView(
            range_start=chart.range_start.isoformat(),
            range_end=chart.range_end.isoformat(),
            tick_marks=[tick.isoformat() for tick in chart.tick_marks],
            markers=markers,
            lane_count=chart.lane_count,
            axis_timezone=zone_identifier(chart.axis_zone),
        ))
    except ValueError as e:
        raise _bad_request(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error laying out timeline: {str(e)}")


@app.post("/timeline/show", response_model=ShowTimelineResponse)
async def show(request: BuildTimelineRequest) -> ShowTimelineResponse:
    """
    Format the timeline as a table.
    """
    try:
        timeline = timeline_for(
            request.start,
            request.end,
            request.is_global_time,
            request.cities,
            request.user_timezone,
            request.event_name,
        )
        view = timeline_to_view(timeline, request.event_name) if timeline is not None else None
        return ShowTimelineResponse(formatted_timeline=format_city_timeline(view))
    except ValueError as e:
        raise _bad_request(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error formatting timeline: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=TIMELINE_SERVICE_PORT)
