"""
API package.
"""
from typing import Sequence
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from omegaconf import OmegaConf
from sqlalchemy.orm import sessionmaker
from .routes import aggregation, samples, streaming
from ....common.config.manager import ConfigManager, ServiceWindow
from ....common.config.models import AnalyticsConfig
from ....common.database import SessionLocal
from ...application.ingest import CounterIngestService
from ...application.service import CongestionAggregationService
from ...infrastructure.broadcast.realtime_broadcaster import RealtimeBroadcaster
from ...infrastructure.repositories import (
    SqlCounterSampleRepository, SqlTimelineProvider, SqlShiftSummaryProvider
)

# Initialize main app
app = FastAPI(title="Counter Congestion Analytics API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(samples.app.router, tags=["samples"])
app.include_router(aggregation.app.router, tags=["congestion"])
app.include_router(streaming.app.router, tags=["streaming"])


def configure(session_factory: sessionmaker, service_windows: Sequence[ServiceWindow],
              broadcaster: RealtimeBroadcaster):
    """
    Wires repositories, providers and services into the route singletons.
    """
    repository = SqlCounterSampleRepository(session_factory)
    service = CongestionAggregationService(
        timeline_provider=SqlTimelineProvider(session_factory),
        shift_summary_provider=SqlShiftSummaryProvider(session_factory, service_windows),
    )
    streaming.init_broadcaster(broadcaster)
    samples.init_samples(repository, CounterIngestService(repository, broadcaster))
    aggregation.init_service(service)


# Initialize shared components with the default configuration
broadcaster = RealtimeBroadcaster()
configure(
    SessionLocal,
    ConfigManager.service_windows(OmegaConf.structured(AnalyticsConfig)),
    broadcaster,
)
