"""AI circuit designer - asks the LLM for loop waypoints, falls back to geometry."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool

from circuitgen.services.route.geometry import Coordinate, is_valid_coordinate

from .candidate import CandidateRoute
from .fallback import generate_fallback_circuits
from .llm_client import CircuitDesignLLMClient, JSONPayload
from .prompts import build_circuit_prompt

logger = logging.getLogger(__name__)

MAX_FEATURES_IN_PROMPT = 20
# A designed route needs at least this many valid waypoints to be routed
MIN_CANDIDATE_WAYPOINTS = 2


class CircuitDesignerService:
    """
    Produces candidate circuits for a start point.

    The LLM is called exactly once per request. Any failure (client not
    configured, network, provider error, unparsable or empty answer) yields
    the deterministic fallback circuits instead, so callers always get
    candidates.
    """

    def __init__(self, llm_client: Optional[CircuitDesignLLMClient] = None) -> None:
        self._llm_client = llm_client

    async def design_circuits(
        self,
        start_lat: float,
        start_lng: float,
        target_distance_km: float,
        nearby_features: List[Dict],
        activity_type: str = "run",
    ) -> List[CandidateRoute]:
        prompt = build_circuit_prompt(
            start_lat,
            start_lng,
            target_distance_km,
            nearby_features[:MAX_FEATURES_IN_PROMPT],
            activity_type,
        )

        try:
            llm_client = self._get_llm_client()
            logger.info("🤖 Asking OpenAI to design circuits...")
            payload = await run_in_threadpool(llm_client.design, prompt)
            candidates = self._to_candidates(payload, target_distance_km)
        except Exception as e:
            logger.error("OpenAI circuit design failed, using fallback patterns: %s", e)
            return generate_fallback_circuits(start_lat, start_lng, target_distance_km)

        if not candidates:
            logger.warning("⚠️ OpenAI returned no usable circuits, using fallback patterns")
            return generate_fallback_circuits(start_lat, start_lng, target_distance_km)

        logger.info("✨ OpenAI designed %d routes", len(candidates))
        return candidates

    def _get_llm_client(self) -> CircuitDesignLLMClient:
        if self._llm_client is None:
            self._llm_client = CircuitDesignLLMClient()
        return self._llm_client

    def _to_candidates(
        self, payload: JSONPayload, target_distance_km: float
    ) -> List[CandidateRoute]:
        if isinstance(payload, dict):
            routes = payload.get("routes", [])
        else:
            routes = payload
        if not isinstance(routes, list):
            return []

        timestamp = int(time.time() * 1000)
        candidates = []
        for idx, route in enumerate(routes):
            if not isinstance(route, dict):
                continue

            waypoints = self._parse_waypoints(route.get("waypoints"))
            if len(waypoints) < MIN_CANDIDATE_WAYPOINTS:
                continue

            estimated = route.get("estimatedDistance")
            if isinstance(estimated, bool) or not isinstance(estimated, (int, float)):
                estimated = target_distance_km

            candidates.append(
                CandidateRoute(
                    id=f"ai_route_{timestamp}_{idx}",
                    name=self._text(route.get("name"), f"AI Circuit {idx + 1}"),
                    waypoints=waypoints,
                    reasoning=self._text(route.get("reasoning"), "AI-designed circuit"),
                    estimated_distance=float(estimated),
                    circuit_type=self._text(route.get("circuitType"), "loop"),
                )
            )

        return candidates

    @staticmethod
    def _text(value: Any, default: str) -> str:
        # Numbers are kept as text; anything else falls back to the default
        if isinstance(value, bool) or value is None:
            return default
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str) and value.strip():
            return value
        return default

    @staticmethod
    def _parse_waypoints(value: Any) -> List[Coordinate]:
        if not isinstance(value, list):
            return []
        waypoints = []
        for item in value:
            if not isinstance(item, dict):
                continue
            lat, lng = item.get("lat"), item.get("lng")
            if is_valid_coordinate(lat, lng):
                waypoints.append((float(lat), float(lng)))
        return waypoints
