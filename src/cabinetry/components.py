"""Dataflow editor components wrapping the cabinet skeleton.

A component declares typed input and output parameters, and its
``solve_instance`` reads inputs and writes outputs through a
:class:`DataAccess` handed to it by the host for each solve.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

import structlog

from .box import build_box_skeleton

logger = structlog.get_logger(__name__)


class ParamAccess(str, Enum):
    ITEM = "item"
    LIST = "list"


class ParamKind(str, Enum):
    NUMBER = "number"
    GENERIC = "generic"


@dataclass(frozen=True)
class ParamSpec:
    """Declaration of one input or output slot."""

    name: str
    nickname: str
    description: str
    kind: ParamKind
    access: ParamAccess = ParamAccess.ITEM
    default: Any = None


class ParamManager:
    """Collects parameter declarations during registration."""

    def __init__(self) -> None:
        self.params: List[ParamSpec] = []

    def add_number_parameter(
        self,
        name: str,
        nickname: str,
        description: str,
        access: ParamAccess = ParamAccess.ITEM,
        default: Optional[float] = None,
    ) -> int:
        self.params.append(ParamSpec(name, nickname, description, ParamKind.NUMBER, access, default))
        return len(self.params) - 1

    def add_generic_parameter(
        self,
        name: str,
        nickname: str,
        description: str,
        access: ParamAccess = ParamAccess.ITEM,
    ) -> int:
        self.params.append(ParamSpec(name, nickname, description, ParamKind.GENERIC, access))
        return len(self.params) - 1


class DataAccess:
    """Input values and output slots for a single solve."""

    def __init__(self, inputs: List[ParamSpec], values: List[Any], outputs: List[ParamSpec]):
        self._inputs = inputs
        self._values = values
        self._outputs: List[Any] = [None] * len(outputs)

    @property
    def outputs(self) -> List[Any]:
        return self._outputs

    def get_data(self, index: int) -> Any:
        """Value of input ``index``, or None when it is missing or unreadable."""
        value = self._values[index]
        if value is None:
            return None

        spec = self._inputs[index]
        if spec.kind == ParamKind.NUMBER:
            try:
                return float(value)
            except (TypeError, ValueError):
                logger.warning("Input is not a number", param=spec.name, value=repr(value))
                return None
        return value

    def set_data(self, index: int, value: Any) -> None:
        self._outputs[index] = value


class Component(ABC):
    """Base class for dataflow components."""

    name: str = ""
    nickname: str = ""
    description: str = ""
    category: str = ""
    subcategory: str = ""
    component_guid: uuid.UUID

    def __init__(self) -> None:
        input_manager = ParamManager()
        output_manager = ParamManager()
        self.register_input_params(input_manager)
        self.register_output_params(output_manager)
        self.inputs = input_manager.params
        self.outputs = output_manager.params

    @abstractmethod
    def register_input_params(self, manager: ParamManager) -> None:
        """Declare the input parameters."""

    @abstractmethod
    def register_output_params(self, manager: ParamManager) -> None:
        """Declare the output parameters."""

    @abstractmethod
    def solve_instance(self, data: DataAccess) -> None:
        """Read inputs from ``data`` and set outputs on it."""

    @property
    def icon(self) -> Optional[bytes]:
        return None

    def solve(self, values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Run one solve with inputs keyed by name or nickname.

        Inputs that are not supplied take their registered default.

        Returns:
            Output values keyed by output name
        """
        values = dict(values or {})
        resolved = []
        for spec in self.inputs:
            if spec.name in values:
                resolved.append(values.pop(spec.name))
            elif spec.nickname in values:
                resolved.append(values.pop(spec.nickname))
            else:
                resolved.append(spec.default)

        if values:
            logger.warning("Ignoring unknown inputs", component=self.name, inputs=sorted(values))

        data = DataAccess(self.inputs, resolved, self.outputs)
        self.solve_instance(data)
        return {spec.name: value for spec, value in zip(self.outputs, data.outputs)}


class CabinetBoxSkeleton(Component):
    """A cabinet skeleton made with all solid sides."""

    name = "CabinetBoxSkeleton"
    nickname = "Skeleton"
    description = "A cabinet skeleton made with all solid sides"
    category = "Cabinetry"
    subcategory = "Base"
    component_guid = uuid.UUID("3F8F548A-617D-4359-8D2B-E5564E77E2E5")

    def register_input_params(self, manager: ParamManager) -> None:
        manager.add_number_parameter("Width", "W", "Width of the cabinet", ParamAccess.ITEM, 36)
        manager.add_number_parameter("Depth", "D", "Depth of the cabinet", ParamAccess.ITEM, 24)
        manager.add_number_parameter("Height", "H", "Height of the cabinet", ParamAccess.ITEM, 36)
        manager.add_number_parameter("Thickness", "T", "Thickness of the cabinet sides", ParamAccess.ITEM, 0.75)

    def register_output_params(self, manager: ParamManager) -> None:
        manager.add_generic_parameter("Cabinet", "C", "Cabinet skeleton", ParamAccess.ITEM)

    def solve_instance(self, data: DataAccess) -> None:
        width = data.get_data(0)
        depth = data.get_data(1)
        height = data.get_data(2)
        thickness = data.get_data(3)

        if width is None or depth is None or height is None or thickness is None:
            logger.debug("Missing input, skipping solve", component=self.name)
            return

        data.set_data(0, build_box_skeleton(width, depth, height, thickness))


COMPONENTS: Dict[str, type[Component]] = {
    CabinetBoxSkeleton.name: CabinetBoxSkeleton,
}
