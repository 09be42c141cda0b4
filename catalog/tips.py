"""
Advisor tip catalog.

Each tip has exactly one trigger, at most one condition, a climate scope
and an optional hemisphere scope. Priority orders the output only; ties
keep the order of this table.
"""

from typing import Dict, Optional, Tuple

from core.models import (
    AdvisorTip,
    AnalysisCompleteTrigger,
    ClimateIsCondition,
    ClimateType,
    DesignReviewTrigger,
    DistanceFromHouseCondition,
    ElementNearTrigger,
    ElementPlacedTrigger,
    ElementPositionTrigger,
    ElevationCompareCondition,
    Hemisphere,
    HemisphereIsCondition,
    SunExposureCondition,
    TipAction,
    WizardStepTrigger,
    ZoneCreatedTrigger,
)

ADVISOR_TIPS: Tuple[AdvisorTip, ...] = (
    # ═══════════════════════════════════════════════════════════════════
    # SITE ANALYSIS
    # ═══════════════════════════════════════════════════════════════════
    AdvisorTip(
        id="analysis-complete-summary",
        trigger=AnalysisCompleteTrigger(),
        headline="Your land has character",
        explanation=(
            "The site analysis found your climate, sun path, prevailing wind and slope. "
            "These patterns are the foundation of the design. Work with them rather than against them."
        ),
        short_reminder="Review the site analysis before placing elements.",
        learn_more=(
            "Permaculture calls these outside influences sectors: sun, wind, water runoff and fire "
            "each arrive from a direction. Knowing them lets you catch helpful energy and deflect "
            "harmful energy."
        ),
        priority=95,
    ),
    AdvisorTip(
        id="analysis-arid",
        trigger=AnalysisCompleteTrigger(),
        climate=ClimateType.ARID,
        headline="Every drop counts",
        explanation=(
            "Your site is dry. Catch rain from every roof, shape the land to slow runoff "
            "and keep soil covered with mulch to cut evaporation."
        ),
        short_reminder="Harvest, slow and store water first.",
        priority=93,
    ),
    AdvisorTip(
        id="analysis-tropical",
        trigger=AnalysisCompleteTrigger(),
        climate=ClimateType.TROPICAL,
        headline="Growth is fast here",
        explanation=(
            "Warm, wet conditions grow biomass quickly. Plan for heavy rain events, "
            "chop-and-drop mulch and plenty of shade for people and soil."
        ),
        short_reminder="Plan for downpours and fast growth.",
        priority=93,
    ),
    AdvisorTip(
        id="analysis-subtropical",
        trigger=AnalysisCompleteTrigger(),
        climate=ClimateType.SUBTROPICAL,
        headline="A long growing season",
        explanation=(
            "Mild winters let you grow both tropical and temperate crops. Use microclimates "
            "near walls and water to stretch the range further."
        ),
        short_reminder="Use microclimates to widen plant choice.",
        priority=93,
    ),
    AdvisorTip(
        id="analysis-temperate",
        trigger=AnalysisCompleteTrigger(),
        climate=ClimateType.TEMPERATE,
        headline="Plan around frost",
        explanation=(
            "Cold winters shape what you can grow. Capture winter sun, shelter from cold wind "
            "and avoid low spots where frost settles."
        ),
        short_reminder="Winter sun in, cold wind out.",
        priority=93,
    ),
    AdvisorTip(
        id="analysis-hemisphere-south",
        trigger=AnalysisCompleteTrigger(),
        hemisphere=Hemisphere.SOUTHERN,
        headline="Your sun is in the north",
        explanation=(
            "In the southern hemisphere the sun tracks across the northern sky. North-facing "
            "slopes and walls are the warm ones; keep tall plants on the south side."
        ),
        short_reminder="North = sunny side.",
        priority=91,
    ),
    AdvisorTip(
        id="analysis-hemisphere-north",
        trigger=AnalysisCompleteTrigger(),
        hemisphere=Hemisphere.NORTHERN,
        headline="Your sun is in the south",
        explanation=(
            "In the northern hemisphere the sun tracks across the southern sky. South-facing "
            "slopes and walls are the warm ones; keep tall plants on the north side."
        ),
        short_reminder="South = sunny side.",
        priority=91,
    ),

    # ═══════════════════════════════════════════════════════════════════
    # WIZARD
    # ═══════════════════════════════════════════════════════════════════
    AdvisorTip(
        id="wizard-boundary",
        trigger=WizardStepTrigger("boundary"),
        headline="Every boundary is unique",
        explanation=(
            "The shape of your boundary decides where zones fall, how water runs and how light "
            "reaches each corner. Trace it carefully for better analysis and tips later."
        ),
        short_reminder="Accurate boundary = better recommendations.",
        learn_more=(
            "Odd shapes can help: narrow strips make good windbreaks, corners become microclimates "
            "and a long boundary means more edge, the most productive part of any ecosystem."
        ),
        priority=92,
    ),
    AdvisorTip(
        id="wizard-location",
        trigger=WizardStepTrigger("location"),
        headline="Start with where you are",
        explanation=(
            "Your location sets the climate, the sun angle and the season lengths. "
            "Search for your address or drop a pin on the property."
        ),
        short_reminder="Find the property on the map.",
        priority=90,
    ),
    AdvisorTip(
        id="wizard-house",
        trigger=WizardStepTrigger("house"),
        headline="Mark the house first",
        explanation=(
            "Zones radiate out from the house, so its position drives the rest of the design. "
            "Place it where it stands today, or where you plan to build."
        ),
        short_reminder="House position drives the zones.",
        priority=89,
    ),

    # ═══════════════════════════════════════════════════════════════════
    # ZONES
    # ═══════════════════════════════════════════════════════════════════
    AdvisorTip(
        id="zone1-created",
        trigger=ZoneCreatedTrigger(1),
        headline="Zone 1 is your daily orbit",
        explanation=(
            "You walk through this area several times a day. Fill it with herbs, salad greens, "
            "a clothesline and anything you harvest or check daily."
        ),
        short_reminder="Herbs, salad and daily harvests go in Zone 1.",
        learn_more=(
            "Zone 1 usually reaches 5-15 metres from the house. Because you see it so often, "
            "pests get noticed early and watering happens reliably."
        ),
        priority=80,
    ),
    AdvisorTip(
        id="zone2-created",
        trigger=ZoneCreatedTrigger(2),
        headline="Zone 2 feeds the family",
        explanation=(
            "Most of your food comes from Zone 2: fruit trees, larger vegetable beds, "
            "chickens and berries. It needs regular but not daily attention."
        ),
        short_reminder="Orchard, poultry and staple crops belong in Zone 2.",
        priority=75,
    ),
    AdvisorTip(
        id="zone3-created",
        trigger=ZoneCreatedTrigger(3),
        headline="Zone 3 is the farm",
        explanation=(
            "Main crops, grazing, larger water storage and nut trees live here. "
            "Choose plants that look after themselves between weekly visits."
        ),
        short_reminder="Low-care crops and pasture in Zone 3.",
        priority=70,
    ),
    AdvisorTip(
        id="zone4-created",
        trigger=ZoneCreatedTrigger(4),
        headline="Zone 4 is semi-wild",
        explanation=(
            "Timber, forage and windbreak plantings belong out here. "
            "Visit seasonally and let natural processes do most of the work."
        ),
        short_reminder="Timber and forage in Zone 4.",
        priority=60,
    ),

    # ═══════════════════════════════════════════════════════════════════
    # STRUCTURES
    # ═══════════════════════════════════════════════════════════════════
    AdvisorTip(
        id="house-placed-zone0",
        trigger=ElementPlacedTrigger("house"),
        headline="The house anchors everything",
        explanation=(
            "The house is Zone 0, the centre of the design. Put the things you use most "
            "often close to it and let rarely-visited areas sit further out."
        ),
        short_reminder="House = Zone 0. Keep daily-use elements nearby.",
        learn_more=(
            "Zones follow how often you interact with a place. Fewer wasted steps means "
            "less energy spent keeping the system running."
        ),
        priority=90,
    ),
    AdvisorTip(
        id="house-face-north",
        trigger=ElementPlacedTrigger("house"),
        condition=HemisphereIsCondition(Hemisphere.SOUTHERN),
        headline="Open the living areas to the north",
        explanation=(
            "Put living rooms and large windows on the north side to take in low winter sun, "
            "and shade them with deciduous plants or eaves in summer."
        ),
        short_reminder="Living areas face north.",
        priority=87,
    ),
    AdvisorTip(
        id="house-face-south",
        trigger=ElementPlacedTrigger("house"),
        condition=HemisphereIsCondition(Hemisphere.NORTHERN),
        headline="Open the living areas to the south",
        explanation=(
            "Put living rooms and large windows on the south side to take in low winter sun, "
            "and shade them with deciduous plants or eaves in summer."
        ),
        short_reminder="Living areas face south.",
        priority=87,
    ),
    AdvisorTip(
        id="shed-access",
        trigger=ElementPlacedTrigger("shed"),
        condition=DistanceFromHouseCondition(50),
        headline="Access matters",
        explanation=(
            "A shed that is awkward to reach gets ignored. Put it on a natural route between "
            "the house and the main work areas so tools are always on the way."
        ),
        short_reminder="Shed on the path between house and garden.",
        priority=55,
    ),
    AdvisorTip(
        id="greenhouse-sunny",
        trigger=ElementPlacedTrigger("greenhouse"),
        condition=SunExposureCondition("sunny"),
        headline="A warm spot for the greenhouse",
        explanation=(
            "Your land slopes toward the sun, so a greenhouse here collects plenty of winter "
            "light. Run the long side to face the sun."
        ),
        short_reminder="Long side of the greenhouse to the sun.",
        priority=66,
    ),
    AdvisorTip(
        id="greenhouse-shaded",
        trigger=ElementPlacedTrigger("greenhouse"),
        condition=SunExposureCondition("shaded"),
        headline="The slope faces away from the sun",
        explanation=(
            "Your land tilts away from the winter sun. Place the greenhouse on the highest, "
            "most open ground and keep tall trees well clear of its sunny side."
        ),
        short_reminder="Greenhouse on open, high ground.",
        priority=66,
    ),

    # ═══════════════════════════════════════════════════════════════════
    # WATER
    # ═══════════════════════════════════════════════════════════════════
    AdvisorTip(
        id="water-tank-placed",
        trigger=ElementPlacedTrigger("water-tank"),
        headline="Water flows downhill",
        explanation=(
            "Put the water tank at the highest practical point. Gravity will carry water to "
            "gardens, orchard and animals without a pump."
        ),
        short_reminder="Tank uphill = free irrigation pressure.",
        learn_more=(
            "Each metre of height gives about 0.1 bar of pressure. A tank 10 metres above the "
            "garden is enough for drip irrigation without electricity."
        ),
        action=TipAction("Move tank uphill", "move_element_uphill"),
        priority=85,
    ),
    AdvisorTip(
        id="water-tank-monsoon",
        trigger=ElementPlacedTrigger("water-tank"),
        climate=ClimateType.TROPICAL,
        headline="Size for the wet season",
        explanation=(
            "Most of your rain arrives in a few months. Size storage to carry you through "
            "the dry season and plan a safe overflow for downpours."
        ),
        short_reminder="Store the wet season for the dry.",
        priority=83,
    ),
    AdvisorTip(
        id="tank-near-garden",
        trigger=ElementNearTrigger("water-tank", "garden-bed", 30),
        condition=ElevationCompareCondition("water-tank", "garden-bed", "higher"),
        headline="Gravity-fed irrigation",
        explanation=(
            "The tank is close to a garden bed and sits above it. Connect a pipe and let "
            "gravity do the watering."
        ),
        short_reminder="Tank above garden = free drip irrigation.",
        priority=82,
    ),
    AdvisorTip(
        id="tank-below-garden",
        trigger=ElementNearTrigger("water-tank", "garden-bed", 30),
        condition=ElevationCompareCondition("water-tank", "garden-bed", "lower"),
        headline="The tank is below the garden",
        explanation=(
            "Water will need a pump to reach this bed. Moving the tank a little uphill "
            "turns it into a gravity-fed system."
        ),
        short_reminder="Lift the tank above the beds it serves.",
        action=TipAction("Move tank uphill", "move_element_uphill"),
        priority=80,
    ),
    AdvisorTip(
        id="tank-uphill-good",
        trigger=ElementPositionTrigger("water-tank", "uphill"),
        headline="Good water placement",
        explanation=(
            "A tank on high ground stores potential energy you can tap with nothing more "
            "than a hose. This is one of the most valuable placements in the design."
        ),
        short_reminder="Tank is well placed at a high point.",
        priority=50,
    ),
    AdvisorTip(
        id="tank-below-house",
        trigger=ElementPositionTrigger("water-tank", "downhill"),
        condition=ElevationCompareCondition("water-tank", "house", "lower"),
        headline="Roof water needs somewhere to go",
        explanation=(
            "The tank sits downhill of the house, which is fine for collecting roof water "
            "but means pumping it back up for household use."
        ),
        short_reminder="Downhill tanks collect; uphill tanks deliver.",
        priority=48,
    ),
    AdvisorTip(
        id="swale-contour",
        trigger=ElementPlacedTrigger("swale"),
        headline="Swales follow the contour",
        explanation=(
            "A swale is a level ditch that stops runoff and lets it soak in. It must run "
            "along the contour, never downhill, or it becomes a drain."
        ),
        short_reminder="Keep swales dead level.",
        priority=74,
    ),
    AdvisorTip(
        id="swale-arid",
        trigger=ElementPlacedTrigger("swale"),
        climate=ClimateType.ARID,
        headline="Slow it, spread it, sink it",
        explanation=(
            "In a dry climate every storm counts. Plant the mound below the swale with "
            "drought-hardy trees that drink the water it stores in the soil."
        ),
        short_reminder="Trees on the swale mound.",
        priority=84,
    ),
    AdvisorTip(
        id="pond-microclimate",
        trigger=ElementPlacedTrigger("pond"),
        headline="Ponds make microclimates",
        explanation=(
            "Water reflects light and evens out temperatures around it. A pond on the sunny "
            "side of a planting can protect tender plants from frost."
        ),
        short_reminder="Ponds warm and brighten nearby beds.",
        priority=72,
    ),
    AdvisorTip(
        id="pond-arid-shade",
        trigger=ElementPlacedTrigger("pond"),
        condition=ClimateIsCondition(ClimateType.ARID),
        headline="Shade the pond",
        explanation=(
            "Open water evaporates fast in dry heat. Keep it deep, partly shaded and "
            "sheltered from hot wind."
        ),
        short_reminder="Deep and shaded ponds lose less water.",
        priority=73,
    ),

    # ═══════════════════════════════════════════════════════════════════
    # PLANTING
    # ═══════════════════════════════════════════════════════════════════
    AdvisorTip(
        id="garden-bed-sun",
        trigger=ElementPlacedTrigger("garden-bed"),
        headline="Sun chases your garden beds",
        explanation=(
            "Run the long axis of each bed east-west. Every row gets full sun as it crosses "
            "the sky and tall plants do not shade short ones."
        ),
        short_reminder="Long axis east-west for maximum sun.",
        action=TipAction("Rotate to face the sun", "rotate_element_to_sun"),
        priority=70,
    ),
    AdvisorTip(
        id="garden-bed-sunny-slope",
        trigger=ElementPlacedTrigger("garden-bed"),
        condition=SunExposureCondition("sunny"),
        headline="A warm slope for vegetables",
        explanation=(
            "Your land faces the sun, so beds here warm up early in spring. "
            "Start heat-loving crops here first."
        ),
        short_reminder="Sun-facing slope = early crops.",
        priority=69,
    ),
    AdvisorTip(
        id="garden-bed-shaded-slope",
        trigger=ElementPlacedTrigger("garden-bed"),
        condition=SunExposureCondition("shaded"),
        headline="A cool slope",
        explanation=(
            "Your land faces away from the sun. Leafy greens and berries cope well; "
            "keep fruiting crops for the sunniest beds."
        ),
        short_reminder="Greens on the cool side.",
        priority=69,
    ),
    AdvisorTip(
        id="fruit-tree-layers",
        trigger=ElementPlacedTrigger("fruit-tree"),
        headline="Think in 3D layers",
        explanation=(
            "One fruit tree can anchor a whole guild. Underneath it, shrubs, herbs, "
            "groundcovers and root crops can all produce food."
        ),
        short_reminder="Plant guilds under fruit trees.",
        learn_more=(
            "A food forest has seven layers: canopy, understory, shrub, herbaceous, "
            "groundcover, root and vine. Each catches light that would otherwise be lost."
        ),
        priority=68,
    ),
    AdvisorTip(
        id="fruit-tree-tropical",
        trigger=ElementPlacedTrigger("fruit-tree"),
        climate=ClimateType.TROPICAL,
        headline="Plant support species first",
        explanation=(
            "Fast nitrogen fixers such as pigeon pea shade young fruit trees and feed the "
            "soil. Chop them back as the fruit trees fill out."
        ),
        short_reminder="Pioneers first, then fruit trees.",
        priority=67,
    ),
    AdvisorTip(
        id="fruit-tree-frost",
        trigger=ElementPlacedTrigger("fruit-tree"),
        climate=ClimateType.TEMPERATE,
        headline="Avoid frost pockets",
        explanation=(
            "Cold air drains downhill and pools in hollows. Plant blossom trees part way up "
            "the slope, not at the bottom."
        ),
        short_reminder="Mid-slope trees escape late frost.",
        priority=66,
    ),
    AdvisorTip(
        id="windbreak-placed",
        trigger=ElementPlacedTrigger("windbreak"),
        headline="Catch the wind early",
        explanation=(
            "A windbreak shelters ground up to ten times its height downwind. Place it across "
            "the prevailing wind, upwind of the areas you want to protect."
        ),
        short_reminder="Windbreak across the prevailing wind.",
        priority=71,
    ),

    # ═══════════════════════════════════════════════════════════════════
    # ANIMALS AND UTILITIES
    # ═══════════════════════════════════════════════════════════════════
    AdvisorTip(
        id="chicken-coop-integration",
        trigger=ElementPlacedTrigger("chicken-coop"),
        headline="Chickens are workers",
        explanation=(
            "Put the coop between the compost and the garden. Chickens turn scraps into "
            "fertiliser, eat pests and scratch mulch into the soil."
        ),
        short_reminder="Coop near compost and garden.",
        priority=65,
    ),
    AdvisorTip(
        id="coop-near-house",
        trigger=ElementNearTrigger("chicken-coop", "house", 10),
        headline="A little too close",
        explanation=(
            "Coops attract flies and can be noisy at dawn. Keep a few extra metres between "
            "the coop and the windows you sleep behind."
        ),
        short_reminder="Coop a short walk from the house.",
        priority=64,
    ),
    AdvisorTip(
        id="coop-near-compost",
        trigger=ElementNearTrigger("chicken-coop", "compost", 15),
        headline="Chickens turn the compost",
        explanation=(
            "With the compost beside the run, the birds work the heap for you: "
            "they scratch it over and add manure."
        ),
        short_reminder="Let the chickens turn the heap.",
        priority=62,
    ),
    AdvisorTip(
        id="beehive-placed",
        trigger=ElementPlacedTrigger("beehive"),
        headline="Bees need shelter and water",
        explanation=(
            "Face the hive entrance toward morning sun, out of the wind and away from "
            "busy paths. Bees need clean water close by."
        ),
        short_reminder="Morning sun, shelter, water.",
        priority=58,
    ),
    AdvisorTip(
        id="beehive-near-pond",
        trigger=ElementNearTrigger("beehive", "pond", 50),
        headline="Water within reach",
        explanation=(
            "The pond gives your bees a drink close to home. Add floating plants or stones "
            "so they can land without drowning."
        ),
        short_reminder="Landing spots for thirsty bees.",
        priority=57,
    ),
    AdvisorTip(
        id="compost-loop",
        trigger=ElementPlacedTrigger("compost"),
        condition=DistanceFromHouseCondition(30),
        headline="Close the loop",
        explanation=(
            "Put the compost between the kitchen door and the garden. Scraps go in on the way "
            "out, finished compost goes on the beds on the way back."
        ),
        short_reminder="Compost between kitchen and garden.",
        priority=60,
    ),
    AdvisorTip(
        id="compost-near-garden",
        trigger=ElementNearTrigger("compost", "garden-bed", 20),
        headline="Short trip to the beds",
        explanation=(
            "Compost close to the beds gets used. A wheelbarrow trip of a few metres "
            "is one you will actually make."
        ),
        short_reminder="Compost close to where it is spread.",
        priority=52,
    ),
    AdvisorTip(
        id="path-connectivity",
        trigger=ElementPlacedTrigger("path"),
        headline="Connect the dots",
        explanation=(
            "Paths link the places you visit most: house to garden, garden to compost, "
            "compost to coop. Good paths cut mud and save time in any weather."
        ),
        short_reminder="Link house, garden, compost and coop.",
        priority=45,
    ),

    # ═══════════════════════════════════════════════════════════════════
    # DESIGN REVIEW
    # ═══════════════════════════════════════════════════════════════════
    AdvisorTip(
        id="design-review-sectors",
        trigger=DesignReviewTrigger(),
        headline="Sector analysis",
        explanation=(
            "Before finalising, check the major sectors: sun path, prevailing wind, water "
            "flow and any fire or noise corridor. Harness or buffer each one."
        ),
        short_reminder="Check sun, wind, water and fire sectors.",
        priority=88,
    ),
    AdvisorTip(
        id="design-review-water",
        trigger=DesignReviewTrigger(),
        headline="Follow the water",
        explanation=(
            "Trace where rain lands, where it runs and where it leaves the property. "
            "Every point where it leaves is a chance to slow it down and store it."
        ),
        short_reminder="Slow water before it leaves.",
        priority=86,
    ),
    AdvisorTip(
        id="design-review-zones",
        trigger=DesignReviewTrigger(),
        headline="Check your zones",
        explanation=(
            "Walk the design in your head. Daily tasks should sit in Zones 1 and 2; "
            "anything you visit rarely can live further out."
        ),
        short_reminder="Frequent visits close, rare visits far.",
        priority=84,
    ),
    AdvisorTip(
        id="design-review-arid-shade",
        trigger=DesignReviewTrigger(),
        climate=ClimateType.ARID,
        headline="Shade is a resource",
        explanation=(
            "In a dry climate shade saves water. Check that paths, beds and animals get "
            "afternoon shade from trees or structures."
        ),
        short_reminder="Afternoon shade everywhere.",
        priority=83,
    ),
)

_TIPS_BY_ID: Dict[str, AdvisorTip] = {tip.id: tip for tip in ADVISOR_TIPS}


def get_tip(tip_id: str) -> Optional[AdvisorTip]:
    return _TIPS_BY_ID.get(tip_id)
