"""Normalization of raw plan documents into plan models."""

from .plan_normalizer import PlanNormalizer

__all__ = ["PlanNormalizer"]
