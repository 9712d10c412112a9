"""Plan Registry - associates shape pairs with their mapping plans.

Keys are ``(source_type, destination_type)`` pairs compared by type
identity. A plan may be registered under several keys when related types
share it. At most one plan object ever exists per key, including under
concurrent first use.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from shape_map.core.exceptions import DuplicateMapError, MapNotFoundError
from shape_map.mapping.plan import ConventionPlan

logger = logging.getLogger(__name__)

PlanFactory = Callable[[type, type], ConventionPlan]


class PlanRegistry:
    """Stores plans by ``(source_type, destination_type)``.

    Plans are never replaced or rebuilt once registered.
    """

    def __init__(self) -> None:
        self._plans: dict[tuple[type, type], ConventionPlan] = {}
        self._lock = threading.RLock()

    def add(self, source_type: type, destination_type: type, plan: ConventionPlan) -> None:
        """Register ``plan`` for the pair.

        Raises:
            DuplicateMapError: If the pair already has a plan.
        """
        key = (source_type, destination_type)
        with self._lock:
            if key in self._plans:
                raise DuplicateMapError(source_type, destination_type)
            self._plans[key] = plan

    def get(self, source_type: type, destination_type: type) -> ConventionPlan:
        """Look up the plan for a pair.

        Raises:
            MapNotFoundError: If no plan is registered.
        """
        try:
            return self._plans[(source_type, destination_type)]
        except KeyError:
            raise MapNotFoundError(source_type, destination_type) from None

    def resolve(
        self,
        source_type: type,
        destination_type: type,
        factory: PlanFactory | None = None,
    ) -> ConventionPlan:
        """Return the plan for a pair, building it with ``factory`` on a miss.

        The factory runs under the registry lock and its plan is only
        registered if it returns normally, so a failed build leaves no
        entry behind.

        Raises:
            MapNotFoundError: On a miss with no factory.
        """
        key = (source_type, destination_type)
        plan = self._plans.get(key)
        if plan is not None:
            return plan
        if factory is None:
            raise MapNotFoundError(source_type, destination_type)

        with self._lock:
            plan = self._plans.get(key)
            if plan is None:
                plan = factory(source_type, destination_type)
                self._plans[key] = plan
                logger.debug(
                    "Created missing map %s -> %s",
                    source_type.__name__,
                    destination_type.__name__,
                )
        return plan

    def has(self, source_type: type, destination_type: type) -> bool:
        return (source_type, destination_type) in self._plans

    def plans(self) -> list[ConventionPlan]:
        """Distinct plans in registration order (shared plans listed once)."""
        seen: dict[int, ConventionPlan] = {}
        for plan in list(self._plans.values()):
            seen.setdefault(id(plan), plan)
        return list(seen.values())

    @property
    def pairs(self) -> list[tuple[type, type]]:
        return list(self._plans)

    def __contains__(self, pair: object) -> bool:
        return pair in self._plans

    def __len__(self) -> int:
        return len(self._plans)
