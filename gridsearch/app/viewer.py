#!/usr/bin/env python3
"""
Grid Search Viewer — draw walls, drag endpoints, watch BFS / A* explore.

- Mouse:
    drag on empty cells  -> paint walls (hold [S] to paint weighted zones)
    click a painted cell -> toggle it back
    drag start / target  -> move it
- Keyboard:
    [B]/[A]      -> select algorithm (BFS / A*)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset search
    [C]          -> clear board
    [W]          -> toggle weighting
    [+]/[-]      -> speed
    [Q]/[ESC]    -> quit

Options (env or CLI, see gridsearch.config):
    --cell-size=30  --width=1200  --height=720  --delay=7  --weight=3  --weighting=on
"""

# --- bootstrap import path so `from gridsearch...` works when run as a script ---
import sys, logging
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# --------------------------------------------------------------------------------

from typing import List, Optional, Tuple
import pygame

from gridsearch import config
from gridsearch.core.grid import Cell, Grid
from gridsearch.core.session import Session
from gridsearch.core.types import Algorithm, CellId, SearchInProgressError, Status, StepResult

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 320            # right band: metrics + buttons
FONT_NAME = None         # default pygame font
MIN_DELAY_MS = 1
MAX_DELAY_MS = 1000

ALGO_LABELS = {Algorithm.BFS: "BFS", Algorithm.ASTAR: "A*"}

# Colors
WHITE       = (255, 255, 255)
GRID_LINE   = (209, 209, 209)
START       = ( 74, 230,  50)
TARGET      = (230,  56,  50)
FRONTIER    = (110, 158, 255)
VISITED     = (184, 248, 255)
PATH        = (255, 223,  41)
WALL        = ( 56,  56,  56)
WEIGHTED    = (222, 157,  53)
NO_PATH     = (120,  40,  40)

CARD_BG     = (24, 28, 36, 220)
CARD_HI     = (255, 255, 255, 18)
PANEL_BG    = (30, 34, 42)
TEXT_LIGHT  = (230, 235, 240)
ACCENT_GOLD = (255, 210, 0)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235, 238, 242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: Session, delay_ms: int = config.STEP_DELAY_MS):
        pygame.init()

        self.session = session
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        grid = session.grid
        self.screen = pygame.display.set_mode(
            (grid.viewport_width + PANEL_W, grid.viewport_height), pygame.RESIZABLE
        )
        pygame.display.set_caption("Grid Search — BFS / A*")

        self._buttons: list[UIButton] = []
        self._layout(*self.screen.get_size())

        self.visited: List[CellId] = []
        self.frontier: List[CellId] = []
        self.path: List[CellId] = []

        self.running = False
        self.clock = pygame.time.Clock()
        self.delay_ms = delay_ms
        self._last_step_ms = 0
        self.state = "Idle"
        self.selected_algo = Algorithm.ASTAR
        self._last_metrics: dict = {}

        # input state
        self._mouse_down = False
        self._drag_item: Optional[str] = None   # "start" | "target" | None
        self._last_painted: Optional[CellId] = None
        self._paint_weighted = False

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        self._right_band = pygame.Rect(max(0, win_w - PANEL_W), 0, PANEL_W, win_h)
        self._build_buttons()

    @property
    def grid(self) -> Grid:
        return self.session.grid

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    # ---------- stepping ----------
    def _tick_algorithm(self):
        now = pygame.time.get_ticks()
        if now - self._last_step_ms >= self.delay_ms:
            self._last_step_ms = now
            self._do_step()

    def _ensure_started(self):
        if self.session.status is Status.IDLE:
            self.session.start(self.selected_algo)
            self.visited.clear(); self.frontier.clear(); self.path = []

    def _do_step(self):
        self._ensure_started()
        res = self.session.step()
        self._apply(res)

    def _apply(self, res: StepResult):
        self.visited.extend(res.visited)
        self.frontier = res.frontier
        if res.path is not None:
            self.path = res.path
        if res.status is Status.SUCCESS:
            self.state = "Done"; self.running = False
        elif res.status is Status.FAILURE:
            self.state = "No path"; self.running = False
        else:
            self.state = "Running" if self.running else "Paused"
        if res.metrics:
            self._last_metrics = res.metrics
        self._refresh_active_states()

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._on_key(e)
            elif e.type == pygame.KEYUP:
                if e.key == pygame.K_s:
                    self._paint_weighted = False
            elif e.type == pygame.VIDEORESIZE:
                self._on_resize(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                consumed = False
                for b in self._buttons:
                    consumed = b.handle_mouse(e) or consumed
                if not consumed:
                    self._on_mouse(e)

    def _on_key(self, e: pygame.event.Event):
        if e.key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif e.key == pygame.K_SPACE:
            self._toggle_run()
        elif e.key == pygame.K_n:
            self._step_once()
        elif e.key == pygame.K_r:
            self._reset()
        elif e.key == pygame.K_c:
            self._clear()
        elif e.key == pygame.K_w:
            self._toggle_weighting()
        elif e.key == pygame.K_s:
            self._paint_weighted = True
        elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._bump_speed(+1)
        elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
            self._bump_speed(-1)
        elif e.key == pygame.K_b:
            self._switch_algo(Algorithm.BFS)
        elif e.key == pygame.K_a:
            self._switch_algo(Algorithm.ASTAR)

    def _on_mouse(self, e: pygame.event.Event):
        if e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self._mouse_down = False
            self._drag_item = None
            self._last_painted = None
            return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            cell = self.grid.get_cell_at(*e.pos)
            if cell is None or e.pos[0] >= self._right_band.x:
                return
            self._mouse_down = True
            if cell.id == self.grid.start_id:
                self._drag_item = "start"
            elif cell.id == self.grid.target_id:
                self._drag_item = "target"
            else:
                self._paint(cell, allow_toggle_off=True)
            return
        if e.type == pygame.MOUSEMOTION and self._mouse_down:
            cell = self.grid.get_cell_at(*e.pos)
            if cell is None or e.pos[0] >= self._right_band.x:
                return
            if self._drag_item is not None:
                self._move_endpoint(cell)
            elif cell.id != self._last_painted:
                self._paint(cell, allow_toggle_off=False)

    # ---------- board edits ----------
    def _prepare_edit(self):
        # editing invalidates whatever run is on screen
        if self.session.status is not Status.IDLE:
            self._reset()

    def _paint(self, cell: Cell, allow_toggle_off: bool):
        self._prepare_edit()
        self._last_painted = cell.id
        if self._paint_weighted:
            self.session.toggle_weighted_zone(cell.id, allow_toggle_off)
        else:
            self.session.toggle_wall(cell.id, allow_toggle_off)

    def _move_endpoint(self, cell: Cell):
        current = self.grid.start_id if self._drag_item == "start" else self.grid.target_id
        if cell.id == current:
            return
        self._prepare_edit()
        if self._drag_item == "start":
            self.session.set_start(cell.id)
        else:
            self.session.set_target(cell.id)

    def _on_resize(self, win_w: int, win_h: int):
        self._prepare_edit()
        view_w = max(self.grid.cell_size * 2, win_w - PANEL_W)
        view_h = max(self.grid.cell_size, win_h)
        try:
            self.session.resize(view_w, view_h)
        except (ValueError, SearchInProgressError) as ex:
            logger.warning("Resize to %sx%s ignored: %s", view_w, view_h, ex)
            return
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        self._layout(win_w, win_h)

    # ---------- controls ----------
    def _toggle_run(self):
        if self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _step_once(self):
        if self.state not in ("Done", "No path"):
            self._do_step()

    def _switch_algo(self, algo: Algorithm):
        self.selected_algo = algo
        self._reset()

    def _toggle_weighting(self):
        self.session.weighting_enabled = not self.session.weighting_enabled
        self._reset()

    def _bump_speed(self, direction: int):
        if direction > 0:
            self.delay_ms = max(MIN_DELAY_MS, self.delay_ms // 2)
        else:
            self.delay_ms = min(MAX_DELAY_MS, self.delay_ms * 2)

    def _reset_overlays(self):
        self.visited.clear()
        self.frontier = []
        self.path = []
        self._last_metrics = {}

    def _reset(self):
        self.running = False
        self.state = "Idle"
        self.session.reset()
        self._reset_overlays()
        self._refresh_active_states()

    def _clear(self):
        self._reset()
        self.session.clear_all_marks()

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(WHITE)
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _fill(self, cell_id: CellId, color: Tuple[int, int, int]):
        c = self.grid.get_cell(cell_id)
        if c is not None:
            pygame.draw.rect(self.screen, color, pygame.Rect(c.x, c.y, c.size, c.size))

    def _draw_grid(self):
        g = self.grid
        for cid in self.visited:
            self._fill(cid, VISITED)
        for cid in g.weighted_ids:
            self._fill(cid, WEIGHTED)
        for cid in self.frontier:
            self._fill(cid, FRONTIER)
        for cid in self.path:
            self._fill(cid, PATH)
        for cid in g.wall_ids:
            self._fill(cid, WALL)
        self._fill(g.start_id, START)
        self._fill(g.target_id, NO_PATH if self.state == "No path" else TARGET)

        cs = g.cell_size
        w, h = g.width_in_cells * cs, g.height_in_cells * cs
        for col in range(g.width_in_cells + 1):
            pygame.draw.line(self.screen, GRID_LINE, (col * cs, 0), (col * cs, h))
        for row in range(g.height_in_cells + 1):
            pygame.draw.line(self.screen, GRID_LINE, (0, row * cs), (w, row * cs))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 36
        gap = 8

        def add(label, cb, *, togglable=False, store_as: str | None = None):
            nonlocal y
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)
            y += h + gap

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run")
        add("Step Once", self._step_once)
        add("Reset", self._reset)
        add("Clear Board", self._clear)

        half = (w - 8) // 2
        self._buttons.append(UIButton("Slower", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Faster", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap

        add("Algo: BFS", lambda: self._switch_algo(Algorithm.BFS), togglable=True, store_as="btn_algo_bfs")
        add("Algo: A*", lambda: self._switch_algo(Algorithm.ASTAR), togglable=True, store_as="btn_algo_astar")
        add("Weighting", self._toggle_weighting, togglable=True, store_as="btn_weighting")

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(getattr(self, "running", False))
        selected = getattr(self, "selected_algo", None)
        if hasattr(self, "btn_algo_bfs"):
            self.btn_algo_bfs.set_active(selected is Algorithm.BFS)
        if hasattr(self, "btn_algo_astar"):
            self.btn_algo_astar.set_active(selected is Algorithm.ASTAR)
        if hasattr(self, "btn_weighting"):
            self.btn_weighting.set_active(self.session.weighting_enabled)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        pygame.draw.rect(self.screen, PANEL_BG, rb)

        card = pygame.Surface((rb.width - 20, 230), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0, 0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line(f"{ALGO_LABELS[self.selected_algo]}: {self.state}", big=True, color=ACCENT_GOLD)
        m = self._last_metrics
        line(f"Visited: {m.get('visited', 0)}")
        line(f"Frontier: {m.get('frontier_size', 0)}")
        if self.state == "Done":
            line(f"Path length: {m.get('path_len', 0)}")
            line(f"Path transit time: {m.get('total_cost')}")
        line(f"Duration: {m.get('duration_ms', 0.0):.2f} ms")
        weighting = f"x{self.session.weight_multiplier}" if self.session.weighting_enabled else "off"
        line(f"Weighting: {weighting}")
        line(f"Delay: {self.delay_ms} ms/step")

        hint = "[S] held: paint weighted" if not self._paint_weighted else "painting weighted zones"
        surf = self.font_small.render(hint, True, TEXT_LIGHT)
        self.screen.blit(surf, (x0, rb.bottom - surf.get_height() - 12))

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main():
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    cell_size = config.resolve_option("cell-size", config.CELL_SIZE, int)
    width = config.resolve_option("width", config.VIEWPORT_WIDTH, int)
    height = config.resolve_option("height", config.VIEWPORT_HEIGHT, int)
    delay = config.resolve_option("delay", config.STEP_DELAY_MS, int)
    weight = config.resolve_option("weight", config.WEIGHT_MULTIPLIER, int)
    weighting = config.resolve_option("weighting", config.WEIGHTING_ENABLED, config.parse_bool)

    try:
        grid = Grid(cell_size, width, height)
    except ValueError as ex:
        logger.error("Cannot build grid: %s", ex)
        sys.exit(1)
    if weight < 1:
        logger.warning("Weight multiplier %s < 1, using %s", weight, config.WEIGHT_MULTIPLIER)
        weight = config.WEIGHT_MULTIPLIER
    Viewer(Session(grid, weighting, weight), delay_ms=max(MIN_DELAY_MS, delay)).run()

if __name__ == "__main__":
    main()
