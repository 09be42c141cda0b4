"""
Project Model and Manager

A Project is one property: its land (boundary, location, area), the site
analysis, one or more designs and the advisor state. Projects are saved
as JSON, one directory per project.
"""

import json
import shutil
import uuid
import logging
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from catalog.elements import get_element_type
from core.errors import BoundaryValidationError
from core.geo import calculate_area, close_ring
from core.models import (
    AdvisorState,
    Element,
    ElementProperties,
    Geometry,
    LayerType,
    Position,
    Ring,
    SiteAnalysis,
    Zone,
)
from core.validation import validate_boundary
from core.zones import assign_zone_level, assign_zones, generate_zones

log = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def new_id() -> str:
    return str(uuid.uuid4())[:8]  # Short ID for readability


def now_iso() -> str:
    return datetime.now().isoformat()


# ═══════════════════════════════════════════════════════════════════════════
# LAND
# ═══════════════════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class Land:
    """
    The property itself. Fixed once the project is created.

    Coordinates are (longitude, latitude) in decimal degrees (WGS84).
    """
    boundary: Ring
    """Closed boundary ring."""

    location: Position
    """Point the user searched for or pinned."""

    area: float
    """Boundary area in square meters."""

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "Land":
        return cls(
            boundary=[tuple(p) for p in data["boundary"]],
            location=tuple(data["location"]),
            area=data["area"],
        )


# ═══════════════════════════════════════════════════════════════════════════
# LAYERS
# ═══════════════════════════════════════════════════════════════════════════
@dataclass
class Layer:
    id: str
    name: str
    type: LayerType
    visible: bool = True

    def to_dict(self) -> Dict:
        return {"id": self.id, "name": self.name, "type": self.type.value, "visible": self.visible}

    @classmethod
    def from_dict(cls, data: Dict) -> "Layer":
        return cls(data["id"], data["name"], LayerType(data["type"]), data.get("visible", True))


def default_layers() -> List[Layer]:
    return [
        Layer(new_id(), "Infrastructure", LayerType.INFRASTRUCTURE),
        Layer(new_id(), "Planting", LayerType.PLANTING),
        Layer(new_id(), "Water", LayerType.WATER),
        Layer(new_id(), "Paths", LayerType.PATHS),
    ]


# ═══════════════════════════════════════════════════════════════════════════
# ELEMENTS
# ═══════════════════════════════════════════════════════════════════════════
def new_element(type_id: str, position: Position, label: Optional[str] = None) -> Element:
    """
    Create a point element of ``type_id`` with catalog defaults.

    Unknown types still get an element, on the infrastructure layer with
    no metadata.
    """
    element_type = get_element_type(type_id)
    properties = ElementProperties(label=label)
    if element_type is not None:
        properties.layer = element_type.default_layer
        properties.meta = element_type.default_meta()
    return Element(
        id=new_id(),
        type_id=type_id,
        geometry=Geometry.point(*position),
        properties=properties,
    )


# ═══════════════════════════════════════════════════════════════════════════
# DESIGN
# ═══════════════════════════════════════════════════════════════════════════
@dataclass
class Design:
    """
    One layout of elements on the land.

    Zones are derived from the house position and are replaced wholesale
    by regenerate_zones().
    """
    id: str
    name: str
    elements: List[Element] = field(default_factory=list)
    zones: List[Zone] = field(default_factory=list)
    layers: List[Layer] = field(default_factory=default_layers)
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)

    @property
    def house(self) -> Optional[Element]:
        return next((e for e in self.elements if e.type_id == "house"), None)

    def get_element(self, element_id: str) -> Optional[Element]:
        return next((e for e in self.elements if e.id == element_id), None)

    def add_element(self, element: Element) -> Element:
        """Add an element and stamp its zone from the current zones."""
        if self.zones:
            element.properties.zone = assign_zone_level(element.position, self.zones)
        self.elements.append(element)
        self.touch()
        return element

    def move_element(
        self,
        element_id: str,
        position: Position,
        land: Optional[Land] = None,
    ) -> Optional[Position]:
        """
        Move an element so its representative point lands on ``position``.

        Polygons are translated as a whole. Moving the house rebuilds the
        zones around its new position when ``land`` is given, otherwise the
        old zones are cleared. Returns the previous position, or None if the
        element does not exist.
        """
        element = self.get_element(element_id)
        if element is None:
            return None

        previous = element.position
        if element.geometry.type == "Point":
            element.geometry = Geometry.point(*position)
        elif previous is not None:
            d_lng = position[0] - previous[0]
            d_lat = position[1] - previous[1]
            element.geometry = Geometry.polygon(
                [(lng + d_lng, lat + d_lat) for lng, lat in element.geometry.coordinates]
            )

        if element is self.house:
            if land is not None:
                self.regenerate_zones(land)
            elif self.zones:
                log.info(f"House moved in design {self.id}; clearing stale zones")
                self.zones = []
                for other in self.elements:
                    other.properties.zone = None
        elif self.zones:
            element.properties.zone = assign_zone_level(element.position, self.zones)
        self.touch()
        return previous

    def remove_element(self, element_id: str) -> Optional[Element]:
        element = self.get_element(element_id)
        if element is not None:
            self.elements.remove(element)
            self.touch()
        return element

    def update_element_meta(self, element_id: str, meta: Dict[str, Any]) -> bool:
        element = self.get_element(element_id)
        if element is None:
            return False
        element.properties.meta = dict(meta)
        self.touch()
        return True

    def regenerate_zones(self, land: Land) -> List[Zone]:
        """
        Rebuild zones around the house and re-assign every element's zone.

        Without a house the zones are cleared.
        """
        house = self.house
        if house is None or house.position is None:
            log.info(f"Design {self.id} has no house; clearing zones")
            self.zones = []
        else:
            self.zones = generate_zones(house.position, land.boundary, land.area)
            assign_zones(self.elements, self.zones)
        self.touch()
        return self.zones

    def touch(self):
        self.updated_at = now_iso()

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "elements": [e.to_dict() for e in self.elements],
            "zones": [z.to_dict() for z in self.zones],
            "layers": [l.to_dict() for l in self.layers],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Design":
        return cls(
            id=data["id"],
            name=data["name"],
            elements=[Element.from_dict(e) for e in data.get("elements", [])],
            zones=[Zone.from_dict(z) for z in data.get("zones", [])],
            layers=[Layer.from_dict(l) for l in data.get("layers", [])],
            created_at=data.get("created_at", now_iso()),
            updated_at=data.get("updated_at", now_iso()),
        )


# ═══════════════════════════════════════════════════════════════════════════
# PROJECT
# ═══════════════════════════════════════════════════════════════════════════
@dataclass
class Project:
    """
    A permaculture design project for one property.

    Each project has:
    - A unique ID and a name
    - The land (boundary, location, area)
    - The site analysis, once it has been fetched
    - One or more designs
    - The advisor state (seen / dismissed / applied tips)
    """

    id: str
    """Unique identifier (short UUID)."""

    name: str
    """Human-readable project name, e.g., 'Hillside Block'."""

    land: Land
    """Boundary, location and area."""

    designs: List[Design] = field(default_factory=list)
    """Designs for this land. The first one is active."""

    analysis: Optional[SiteAnalysis] = None
    """Climate, sun, wind and elevation summary."""

    advisor_state: AdvisorState = field(default_factory=AdvisorState)
    """How the user has responded to advisor tips."""

    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)

    version: int = SCHEMA_VERSION
    """Serialized format version."""

    @property
    def active_design(self) -> Optional[Design]:
        return self.designs[0] if self.designs else None

    def reset_advisor(self):
        """Forget every seen, dismissed and applied tip."""
        self.advisor_state = AdvisorState()
        self.touch()

    def touch(self):
        self.updated_at = now_iso()

    def to_dict(self) -> Dict:
        """Serialize project to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "land": self.land.to_dict(),
            "designs": [d.to_dict() for d in self.designs],
            "analysis": self.analysis.to_dict() if self.analysis else None,
            "advisor_state": self.advisor_state.to_dict(),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Project":
        """Deserialize project from dictionary."""
        analysis = data.get("analysis")
        return cls(
            id=data["id"],
            name=data["name"],
            land=Land.from_dict(data["land"]),
            designs=[Design.from_dict(d) for d in data.get("designs", [])],
            analysis=SiteAnalysis.from_dict(analysis) if analysis else None,
            advisor_state=AdvisorState.from_dict(data.get("advisor_state", {})),
            created_at=data.get("created_at", now_iso()),
            updated_at=data.get("updated_at", now_iso()),
            version=data.get("version", SCHEMA_VERSION),
        )


# ═══════════════════════════════════════════════════════════════════════════
# PROJECT MANAGER
# ═══════════════════════════════════════════════════════════════════════════
class ProjectManager:
    """
    Manages all projects - create, list, load, save, delete.

    Each project is stored as ``<projects_dir>/<id>/project.json``.
    """

    DEFAULT_DIR = Path("projects")

    def __init__(self, projects_dir: Optional[Path] = None):
        self.projects_dir = Path(projects_dir) if projects_dir else self.DEFAULT_DIR
        self.projects_dir.mkdir(parents=True, exist_ok=True)

    def _config_path(self, project_id: str) -> Path:
        return self.projects_dir / project_id / "project.json"

    def create_project(
        self,
        name: str,
        location: Position,
        boundary: Ring,
        analysis: Optional[SiteAnalysis] = None,
    ) -> Project:
        """
        Create and save a new project.

        Args:
            name: Human-readable name for the project
            location: (lng, lat) the user searched for
            boundary: Property boundary ring
            analysis: Site analysis, if already fetched

        Returns:
            The created Project, with one empty design

        Raises:
            BoundaryValidationError: If the boundary is not a usable polygon
        """
        result = validate_boundary(boundary)
        if not result.valid:
            raise BoundaryValidationError(result.error)
        if result.warning:
            log.warning(f"Project '{name}': {result.warning}")

        boundary = close_ring(boundary)
        project = Project(
            id=new_id(),
            name=name,
            land=Land(boundary=boundary, location=tuple(location), area=calculate_area(boundary)),
            designs=[Design(id=new_id(), name="Design 1")],
            analysis=analysis,
        )
        self.save(project)
        log.info(f"Created project '{name}' with ID {project.id} ({project.land.area:.0f} sqm)")
        return project

    def save(self, project: Project):
        """Save project to disk."""
        path = self._config_path(project.id)
        path.parent.mkdir(parents=True, exist_ok=True)
        project.touch()
        with open(path, "w") as f:
            json.dump(project.to_dict(), f, indent=2)
        log.debug(f"Saved project {project.id} to {path}")

    def get_project(self, project_id: str) -> Optional[Project]:
        """Load a project by ID, None if it does not exist."""
        path = self._config_path(project_id)
        if not path.exists():
            return None
        with open(path, "r") as f:
            return Project.from_dict(json.load(f))

    def list_projects(self) -> List[Project]:
        """All saved projects, newest first."""
        projects = []
        for folder in self.projects_dir.iterdir():
            if folder.is_dir():
                project = self.get_project(folder.name)
                if project:
                    projects.append(project)
        return sorted(projects, key=lambda p: p.created_at, reverse=True)

    def delete_project(self, project_id: str) -> bool:
        """Delete a project and all its data."""
        project_dir = self.projects_dir / project_id
        if project_dir.exists():
            shutil.rmtree(project_dir)
            log.info(f"Deleted project {project_id}")
            return True
        return False
