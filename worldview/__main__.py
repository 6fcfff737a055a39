from rich.prompt import Prompt

from worldview.engine import TrackingEngine
from worldview.logs import console, setup_logging
from worldview.regions import DEFAULT_REGION, list_regions
from worldview.tui import WorldviewApp


def main():
    choices = [r.id for r in list_regions()]
    region_id = Prompt.ask("Region", choices=choices, default=DEFAULT_REGION)
    console.print(f"[cyan]Starting tracker over {region_id}. Press 'q' to quit.[/cyan]")

    setup_logging(to_file=True)
    engine = TrackingEngine(region_id=region_id)
    WorldviewApp(engine).run()


if __name__ == "__main__":
    main()
