"""
Walk through a small design end to end: land, house, zones, a few
elements, advisor tips, the action plan and companion checks.

Runs offline by default. Pass --analyze to fetch climate, sun and
terrain for the location first.
"""

import logging

from catalog.elements import get_element_type
from core.action_plan import generate_action_plan
from core.advisor import AdvisorQueue, ElementPlaced, ZoneCreated, process_event
from core.companions import check_companions, suggest_guild
from core.errors import AnalysisError
from core.geo import destination, square_around
from core.project import ProjectManager, new_element
from core.settings import get_settings
from core.units import format_area

# Nelson, New Zealand
START_LAT = -41.2706
START_LON = 173.2840

log = logging.getLogger(__name__)


def place(design, queue, analysis, type_id, position, label=None):
    element = design.add_element(new_element(type_id, position, label))
    queue.enqueue(process_event(ElementPlaced(element, analysis), queue.state, design.elements, design.zones))
    return element


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Comfrey permaculture site design walkthrough")
    parser.add_argument("--lat", type=float, default=START_LAT, help="Latitude of the property")
    parser.add_argument("--lng", type=float, default=START_LON, help="Longitude of the property")
    parser.add_argument("--size", type=float, default=100.0, help="Side of the square property in meters")
    parser.add_argument("--analyze", action="store_true", help="Fetch climate, sun and terrain data")
    parser.add_argument("--projects-dir", default="projects", help="Directory to save projects")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s │ %(name)-20s │ %(levelname)-8s │ %(message)s',
        datefmt='%H:%M:%S',
    )

    center = (args.lng, args.lat)
    print("Comfrey Site Designer")

    # 1. Site analysis (optional)
    analysis = None
    if args.analyze:
        from loaders.site_analysis import SiteAnalyzer

        print(f"1. Analyzing site @ {args.lat}, {args.lng}...")
        try:
            analysis = SiteAnalyzer(settings).analyze(args.lat, args.lng)
            print(f"   -> {analysis.climate.type.value} climate, {analysis.wind.label}, "
                  f"{analysis.elevation.aspect_label}")
        except AnalysisError as e:
            print(f"   -> {e}")
    else:
        print("1. Skipping site analysis (offline)")

    # 2. Land
    print(f"2. Creating a {args.size:.0f} m square property...")
    manager = ProjectManager(args.projects_dir)
    project = manager.create_project("Demo Block", center, square_around(center, args.size), analysis)
    print(f"   -> {format_area(project.land.area)}")

    design = project.active_design
    queue = AdvisorQueue(project.advisor_state)

    # 3. House and zones
    print("3. Placing the house and generating zones...")
    place(design, queue, analysis, "house", center)
    for zone in design.regenerate_zones(project.land):
        queue.enqueue(process_event(ZoneCreated(zone), queue.state, design.elements, design.zones))
        print(f"   -> Zone {zone.level}: {zone.description}")

    # 4. Elements
    print("4. Placing elements...")
    place(design, queue, analysis, "water-tank", destination(center, 20, 0))
    place(design, queue, analysis, "garden-bed", destination(center, 15, 90))
    place(design, queue, analysis, "compost", destination(center, 25, 120))
    apple = destination(center, 35, 200)
    place(design, queue, analysis, "plant:apple", apple)
    place(design, queue, analysis, "plant:comfrey", destination(apple, 2, 90))
    place(design, queue, analysis, "plant:walnut", destination(apple, 8, 270))
    for element in design.elements:
        element_type = get_element_type(element.type_id)
        name = element_type.name if element_type else element.type_id
        print(f"   -> {name:<15} zone {element.properties.zone}")

    # 5. Advisor
    print("\n=== ADVISOR TIPS ===")
    while queue.active_tip:
        tip = queue.next()
        print(f"[{tip.priority:>3}] {tip.headline}")
        print(f"      {tip.short_reminder}")

    # 6. Action plan
    print("\n=== ACTION PLAN ===")
    plan = generate_action_plan(design.elements, analysis)
    for phase in plan.phases:
        print(f"\nYear {phase.year}: {phase.title}")
        for item in phase.items:
            print(f"  - [{item.priority}] {item.description}")

    # 7. Companions
    print("\n=== COMPANIONS ===")
    check = check_companions(design.elements)
    for pair in check.good:
        print(f"  + {pair.reason}")
    for pair in check.bad:
        print(f"  ! {pair.reason}")

    guild = suggest_guild("apple")
    if guild:
        print(f"\nSuggested guild around {guild.center_plant.name}:")
        for layer in guild.layers:
            names = ", ".join(p.name for p in layer.suggestions)
            print(f"  {layer.layer:<12} {names}")

    manager.save(project)
    print(f"\nSaved project {project.id} to {args.projects_dir}/")


if __name__ == "__main__":
    main()
