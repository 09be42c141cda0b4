"""
Core data models for the Comfrey site designer.

Positions are (longitude, latitude) tuples in degrees. A ring is a closed
list of positions (first == last). Zone geometries are lists of rings in
GeoJSON order: exterior first, then holes.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

Position = Tuple[float, float]
Ring = List[Position]


# ═══════════════════════════════════════════════════════════════════════════
# ENUMERATIONS
# ═══════════════════════════════════════════════════════════════════════════
class ClimateType(str, Enum):
    """Broad climate classes used to scope advice."""
    TROPICAL = "tropical"
    SUBTROPICAL = "subtropical"
    TEMPERATE = "temperate"
    ARID = "arid"


class Hemisphere(str, Enum):
    NORTHERN = "northern"
    SOUTHERN = "southern"


class LayerType(str, Enum):
    """Map layers an element can live on."""
    INFRASTRUCTURE = "infrastructure"
    PLANTING = "planting"
    WATER = "water"
    PATHS = "paths"


class ElementCategory(str, Enum):
    STRUCTURE = "structure"
    PLANT = "plant"
    WATER = "water"
    ANIMAL = "animal"
    PATH = "path"
    UTILITY = "utility"


ALL_CLIMATES = "all"


# ═══════════════════════════════════════════════════════════════════════════
# ELEMENT CATALOG TYPES
# ═══════════════════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class FieldDef:
    """Schema entry for one element-specific metadata field."""
    type: str  # "string" | "number" | "boolean" | "select"
    label: str
    required: bool = False
    default: Any = None
    options: Optional[Tuple[str, ...]] = None  # select only
    unit: Optional[str] = None  # e.g. "liters"
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class ElementType:
    """
    Static catalog entry describing a kind of placeable element.

    Element instances refer to their type by ``id`` only.
    """
    id: str
    name: str
    category: ElementCategory
    default_size: Tuple[float, float]  # (width, height) in meters
    can_rotate: bool
    can_resize: bool
    implementation_phase: int  # 1-3, year to implement
    meta_schema: Dict[str, FieldDef] = field(default_factory=dict)

    @property
    def default_layer(self) -> LayerType:
        if self.category == ElementCategory.PLANT:
            return LayerType.PLANTING
        if self.category == ElementCategory.WATER:
            return LayerType.WATER
        if self.category == ElementCategory.PATH:
            return LayerType.PATHS
        return LayerType.INFRASTRUCTURE

    def default_meta(self) -> Dict[str, Any]:
        """Metadata map pre-filled with every field default."""
        return {
            name: field_def.default
            for name, field_def in self.meta_schema.items()
            if field_def.default is not None
        }


# ═══════════════════════════════════════════════════════════════════════════
# DESIGN ELEMENTS
# ═══════════════════════════════════════════════════════════════════════════
@dataclass
class Geometry:
    """
    A point or single-ring polygon, GeoJSON style.

    ``coordinates`` is a Position for points and a Ring for polygons.
    """
    type: str  # "Point" | "Polygon"
    coordinates: Union[Position, Ring]

    @classmethod
    def point(cls, lng: float, lat: float) -> "Geometry":
        return cls("Point", (lng, lat))

    @classmethod
    def polygon(cls, ring: Ring) -> "Geometry":
        ring = [tuple(p) for p in ring]
        if ring and ring[0] != ring[-1]:
            ring.append(ring[0])
        return cls("Polygon", ring)

    @property
    def representative_point(self) -> Optional[Position]:
        """
        The point used for distance, zone and elevation checks.

        Polygons use the average of their ring vertices.
        """
        if self.type == "Point":
            return tuple(self.coordinates)
        ring = self.coordinates
        if not ring:
            return None
        lng = sum(p[0] for p in ring) / len(ring)
        lat = sum(p[1] for p in ring) / len(ring)
        return (lng, lat)

    def to_dict(self) -> Dict:
        return {"type": self.type, "coordinates": self.coordinates}

    @classmethod
    def from_dict(cls, data: Dict) -> "Geometry":
        if data["type"] == "Point":
            return cls("Point", tuple(data["coordinates"]))
        return cls("Polygon", [tuple(p) for p in data["coordinates"]])


@dataclass
class ElementProperties:
    rotation: float = 0.0  # degrees, 0-360
    scale: float = 1.0  # multiplier
    zone: Optional[int] = None  # 0-5, assigned from generated zones
    layer: LayerType = LayerType.INFRASTRUCTURE
    label: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.scale < 0:
            raise ValueError(f"Element scale must be >= 0, got {self.scale}")
        self.rotation = self.rotation % 360
        self.layer = LayerType(self.layer)


@dataclass
class Element:
    """A placed design item."""
    id: str
    type_id: str
    geometry: Geometry
    properties: ElementProperties = field(default_factory=ElementProperties)

    @property
    def position(self) -> Optional[Position]:
        return self.geometry.representative_point

    def to_dict(self) -> Dict:
        props = asdict(self.properties)
        props["layer"] = self.properties.layer.value
        return {
            "id": self.id,
            "type_id": self.type_id,
            "geometry": self.geometry.to_dict(),
            "properties": props,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Element":
        return cls(
            id=data["id"],
            type_id=data["type_id"],
            geometry=Geometry.from_dict(data["geometry"]),
            properties=ElementProperties(**data.get("properties", {})),
        )


@dataclass
class Zone:
    """A generated permaculture zone polygon."""
    id: str
    level: int  # 0-5
    geometry: List[Ring]  # exterior ring, then holes
    color: str  # rgba() fill
    description: str

    @property
    def exterior(self) -> Ring:
        return self.geometry[0]

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "Zone":
        rings = [[tuple(p) for p in ring] for ring in data["geometry"]]
        return cls(
            id=data["id"],
            level=data["level"],
            geometry=rings,
            color=data["color"],
            description=data["description"],
        )


# ═══════════════════════════════════════════════════════════════════════════
# SITE ANALYSIS (produced by loaders, read-only for the core)
# ═══════════════════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class SunPosition:
    altitude: float  # degrees above horizon at solar noon
    azimuth: float  # degrees from north, clockwise
    sunrise: str  # "HH:MM" local solar time
    sunset: str
    daylength: float  # hours

    @classmethod
    def placeholder(cls) -> "SunPosition":
        return cls(altitude=0.0, azimuth=0.0, sunrise="--:--", sunset="--:--", daylength=0.0)


@dataclass(frozen=True)
class SunSummary:
    summer_solstice: SunPosition
    winter_solstice: SunPosition
    equinox: SunPosition
    longest_day: float  # hours
    shortest_day: float

    @classmethod
    def placeholder(cls) -> "SunSummary":
        empty = SunPosition.placeholder()
        return cls(empty, empty, empty, 0.0, 0.0)


@dataclass(frozen=True)
class ClimateInfo:
    type: ClimateType
    hemisphere: Hemisphere
    avg_rainfall: float  # mm/year
    summer_temp: float  # warmest month mean, celsius
    winter_temp: float  # coldest month mean, celsius
    frost_free_days: int
    zone: str = ""  # hardiness zone, not derived yet
    monsoon_months: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class WindSummary:
    prevailing: float  # degrees, direction wind comes from
    avg_speed: float  # km/h
    label: str


@dataclass(frozen=True)
class ElevationSummary:
    min: float
    max: float
    slope: float  # degrees
    aspect: float  # downhill compass direction, 0 = north
    aspect_label: str

    @classmethod
    def placeholder(cls) -> "ElevationSummary":
        return cls(min=0.0, max=0.0, slope=0.0, aspect=0.0, aspect_label="Elevation data unavailable")

    @property
    def available(self) -> bool:
        return self.aspect_label != "Elevation data unavailable"


@dataclass(frozen=True)
class SiteAnalysis:
    climate: ClimateInfo
    sun: SunSummary
    wind: WindSummary
    elevation: ElevationSummary

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "SiteAnalysis":
        climate = dict(data["climate"])
        climate["type"] = ClimateType(climate["type"])
        climate["hemisphere"] = Hemisphere(climate["hemisphere"])
        if climate.get("monsoon_months") is not None:
            climate["monsoon_months"] = tuple(climate["monsoon_months"])
        sun = data["sun"]
        return cls(
            climate=ClimateInfo(**climate),
            sun=SunSummary(
                summer_solstice=SunPosition(**sun["summer_solstice"]),
                winter_solstice=SunPosition(**sun["winter_solstice"]),
                equinox=SunPosition(**sun["equinox"]),
                longest_day=sun["longest_day"],
                shortest_day=sun["shortest_day"],
            ),
            wind=WindSummary(**data["wind"]),
            elevation=ElevationSummary(**data["elevation"]),
        )


# ═══════════════════════════════════════════════════════════════════════════
# ADVISOR TIPS
# ═══════════════════════════════════════════════════════════════════════════
# Triggers: exactly one per tip.
@dataclass(frozen=True)
class ElementPlacedTrigger:
    element_type: str


@dataclass(frozen=True)
class ElementNearTrigger:
    element_a: str
    element_b: str
    max_distance: float  # meters


@dataclass(frozen=True)
class ElementPositionTrigger:
    element_type: str
    check: str  # uphill | downhill | sunny | shaded | windward | leeward


@dataclass(frozen=True)
class ZoneCreatedTrigger:
    zone_level: int


@dataclass(frozen=True)
class AnalysisCompleteTrigger:
    pass


@dataclass(frozen=True)
class WizardStepTrigger:
    step: str


@dataclass(frozen=True)
class DesignReviewTrigger:
    pass


TipTrigger = Union[
    ElementPlacedTrigger,
    ElementNearTrigger,
    ElementPositionTrigger,
    ZoneCreatedTrigger,
    AnalysisCompleteTrigger,
    WizardStepTrigger,
    DesignReviewTrigger,
]


# Conditions: zero or one per tip.
@dataclass(frozen=True)
class ElevationCompareCondition:
    element_a: str
    element_b: str
    expected: str  # "higher" | "lower"


@dataclass(frozen=True)
class DistanceFromHouseCondition:
    max_meters: float


@dataclass(frozen=True)
class SunExposureCondition:
    aspect: str  # "sunny" | "shaded"


@dataclass(frozen=True)
class ClimateIsCondition:
    climate: ClimateType


@dataclass(frozen=True)
class HemisphereIsCondition:
    hemisphere: Hemisphere


TipCondition = Union[
    ElevationCompareCondition,
    DistanceFromHouseCondition,
    SunExposureCondition,
    ClimateIsCondition,
    HemisphereIsCondition,
]


@dataclass(frozen=True)
class TipAction:
    label: str  # "Move it for me"
    type: str  # move_element_uphill | rotate_element_to_sun | suggest_position | open_learn_more
    payload: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class AdvisorTip:
    """A catalog rule: when the trigger fires and the filters pass, show this."""
    id: str
    trigger: TipTrigger
    headline: str
    explanation: str
    short_reminder: str
    priority: int  # 1-100, higher shown first
    climate: Union[ClimateType, str] = ALL_CLIMATES
    hemisphere: Optional[Hemisphere] = None
    condition: Optional[TipCondition] = None
    learn_more: Optional[str] = None
    action: Optional[TipAction] = None


@dataclass
class AdvisorState:
    """
    Per-project record of how the user has responded to tips.

    Ids are only ever appended; dismissed tips never resurface.
    """
    seen_tips: List[str] = field(default_factory=list)
    dismissed_tips: List[str] = field(default_factory=list)
    applied_tips: List[str] = field(default_factory=list)

    def mark_seen(self, tip_id: str) -> None:
        if tip_id not in self.seen_tips:
            self.seen_tips.append(tip_id)

    def dismiss(self, tip_id: str) -> None:
        if tip_id not in self.dismissed_tips:
            self.dismissed_tips.append(tip_id)
        self.mark_seen(tip_id)

    def apply(self, tip_id: str) -> None:
        if tip_id not in self.applied_tips:
            self.applied_tips.append(tip_id)
        self.mark_seen(tip_id)

    def has_seen(self, tip_id: str) -> bool:
        return tip_id in self.seen_tips

    def is_dismissed(self, tip_id: str) -> bool:
        return tip_id in self.dismissed_tips

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "AdvisorState":
        return cls(**data)


# ═══════════════════════════════════════════════════════════════════════════
# ACTION PLAN
# ═══════════════════════════════════════════════════════════════════════════
@dataclass
class ActionItem:
    description: str  # "Install Water Tank in zone 2 on the north facing slope"
    category: LayerType
    zone: int
    priority: str  # essential | recommended | optional
    element_id: Optional[str] = None


@dataclass
class ActionPhase:
    year: int
    title: str
    items: List[ActionItem] = field(default_factory=list)


@dataclass
class ActionPlan:
    phases: List[ActionPhase] = field(default_factory=list)
