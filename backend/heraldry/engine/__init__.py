"""Heraldry rendering engine."""

from heraldry.engine.blazon import BlazonGenerator
from heraldry.engine.config import RenderConfig
from heraldry.engine.generation import GenerationCounter, RenderSession
from heraldry.engine.pipeline import RenderPipeline, RenderResult

__all__ = [
    "BlazonGenerator",
    "RenderConfig",
    "GenerationCounter",
    "RenderSession",
    "RenderPipeline",
    "RenderResult",
]
