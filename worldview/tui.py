import logging
import re

import urwid

from worldview import config
from worldview.models import SatelliteEntity
from worldview.regions import list_layers, list_regions

logger = logging.getLogger(__name__)

map_rows = 22
map_cols = 96
background_glyph = "⠀"
heading_glyphs = "↑↗→↘↓↙←↖"

palette = [
    ("black", "black", ""), ("dark_green", "dark green", ""), ("dark_cyan", "dark cyan", ""),
    ("gray", "light gray", ""), ("red", "light red", ""), ("green", "light green", ""),
    ("yellow", "yellow", ""), ("cyan", "light cyan", ""), ("white", "white", ""),
    ("border", "dark cyan", ""), ("button", "white", ""), ("button_focus", "black", "dark cyan"),
]

source_colours = {"PRIMARY": "green", "PROXY": "yellow", "SIMULATED": "red"}


def parse_colours(s):
    result = []
    pos = 0
    for match in re.finditer(r'\[(\w+)\](.*?)\[/\1\]', s):
        if match.start() > pos:
            result.append(s[pos:match.start()])
        result.append((match.group(1), match.group(2)))
        pos = match.end()
    if pos < len(s):
        result.append(s[pos:])
    return result


def screen_to_cell(screen_x, screen_y, rows=map_rows, cols=map_cols):
    row = int(screen_y / 100 * (rows - 1))
    col = int(screen_x / 100 * (cols - 1))
    return max(0, min(rows - 1, row)), max(0, min(cols - 1, col))


def marker_for(entity):
    if isinstance(entity, SatelliteEntity):
        return "[cyan]*[/cyan]"
    sector = int(((entity.heading_deg + 22.5) % 360) // 45)
    return f"[green]{heading_glyphs[sector]}[/green]"


def draw_map_frame(view, rows=map_rows, cols=map_cols):
    frame = [[background_glyph] * cols for _ in range(rows)]

    r, c = screen_to_cell(50, 50, rows, cols)
    frame[r][c] = "[dark_cyan]+[/dark_cyan]"

    for projected in view.entities:
        r, c = screen_to_cell(projected.screen_x, projected.screen_y, rows, cols)
        if view.mode == "focus":
            frame[r][c] = "[red]@[/red]"
        else:
            frame[r][c] = marker_for(projected.entity)

    return "\n".join("".join(row) for row in frame)


def status_line(view):
    parts = []
    if view.source:
        colour = source_colours.get(view.source, "white")
        parts.append(f"[{colour}]{view.source}[/{colour}]")
    else:
        parts.append("[gray]AWAITING SIGNAL[/gray]")
    parts.append(f"{view.region.label} / {view.layer.label}")
    parts.append(f"{len(view.entities)} shown / {view.total_count} tracked")
    if view.locked_entity is not None:
        label = getattr(view.locked_entity, "callsign", None) or view.locked_entity.name
        parts.append(f"[red]LOCK {label}[/red]")
    return " | ".join(parts)


def telemetry_lines(entity):
    if entity is None:
        return ["No lock. 'l' locks the contact nearest the reticle."]
    if isinstance(entity, SatelliteEntity):
        return [
            f"{entity.name}  NORAD {entity.norad_id}",
            f"{entity.orbit_class.name}  inc {entity.inclination_deg:.1f}°  alt {entity.altitude_km:.0f} km",
            f"{entity.lat:.4f}°N {entity.lon:.4f}°E",
        ]
    return [
        f"{entity.callsign}  ({entity.id})",
        f"FL{entity.flight_level}  {entity.speed_kts:.0f} KTS  HDG {entity.heading_deg:.0f}°  {entity.country}",
        f"{entity.lat:.4f}°N {entity.lon:.4f}°E",
    ]


class WorldviewApp:
    def __init__(self, engine):
        self.engine = engine
        self.loop = None
        self.running = False
        self.update_interval = config.ui_update_interval

    def on_region(self, button, region_id):
        self.engine.select_region(region_id)
        self.update_display()

    def on_layer(self, button, layer_id):
        self.engine.select_layer(layer_id)
        self.update_display()

    def create_main_widget(self):
        self.status_text = urwid.Text("", align='center')
        self.map_text = urwid.Text("", align='center')
        self.telemetry_text = urwid.Text("", align='left')
        self.ticker_text = urwid.Text("", align='center')

        items = [urwid.Text("Regions")]
        for region in list_regions():
            items.append(urwid.AttrMap(urwid.Button(region.label, on_press=self.on_region, user_data=region.id),
                                       'button', 'button_focus'))
        items += [urwid.Divider(), urwid.Text("Layers")]
        for layer in list_layers():
            items.append(urwid.AttrMap(urwid.Button(layer.label, on_press=self.on_layer, user_data=layer.id),
                                       'button', 'button_focus'))

        menu = urwid.Pile([
            urwid.ListBox(urwid.SimpleListWalker(items)),
            ('pack', urwid.Divider()),
            ('pack', urwid.Text("'l' lock  'r' release\n'q' quit", align='center')),
        ])
        menu_box = urwid.AttrMap(urwid.LineBox(menu, title="Menu"), 'border')

        content = urwid.Pile([
            ('pack', urwid.AttrMap(urwid.LineBox(self.status_text), 'border')),
            ('pack', urwid.AttrMap(urwid.LineBox(self.map_text, title="Viewport"), 'border')),
            ('pack', urwid.AttrMap(urwid.LineBox(self.ticker_text, title="Tracked Aircraft"), 'border')),
            ('weight', 1, urwid.AttrMap(urwid.LineBox(urwid.Filler(self.telemetry_text, valign='top'),
                                                      title="Telemetry"), 'border')),
        ])

        return urwid.Columns([
            ('weight', 1, menu_box),
            ('weight', 5, content),
        ], dividechars=1, focus_column=0)

    def update_display(self):
        view = self.engine.view()
        self.status_text.set_text(parse_colours(status_line(view)))
        self.map_text.set_text(parse_colours(draw_map_frame(view)))
        self.telemetry_text.set_text("\n".join(telemetry_lines(view.locked_entity)))
        self.ticker_text.set_text(" | ".join(self.engine.ticker()) or "Awaiting signal...")

    def _tick(self, loop=None, data=None):
        if not self.running:
            return
        self.update_display()
        self.loop.set_alarm_in(self.update_interval, self._tick)

    def unhandled_input(self, key):
        if key in ('q', 'Q'):
            self.running = False
            raise urwid.ExitMainLoop()
        elif key == 'l':
            entity = self.engine.lock_nearest()
            if entity is None:
                logger.info("nothing to lock in view")
            self.update_display()
        elif key == 'r':
            self.engine.release()
            self.update_display()

    def run(self):
        self.running = True
        self.loop = urwid.MainLoop(self.create_main_widget(), palette=palette, unhandled_input=self.unhandled_input)
        self.loop.set_alarm_in(0, self._tick)
        with self.engine:
            try:
                self.loop.run()
            except KeyboardInterrupt:
                pass
            finally:
                self.running = False
