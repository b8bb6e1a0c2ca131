from __future__ import annotations

import time

from .collision import collides
from .config import BORDER_COLS, DEFAULT_PLAYFIELD, Playfield
from .difficulty import current_difficulty
from .logger import flush_logging, get_logger, setup_logging
from .obstacles import ObstacleSet
from .player import LEFT, RIGHT, Player
from .screen import (
    MOVE_LEFT,
    MOVE_RIGHT,
    QUIT,
    ConsoleKeys,
    ConsoleSurface,
    CursesKeys,
    CursesSurface,
    key_action,
)
from .stats import HEADER, SessionRecord, StatsLog, format_row

log = get_logger("game")

CAR_ART = [" ++ ", "++++", " ++ ", "++++"]
ENEMY_ART = ["****", " ** ", "****", " ** "]

# sidebar text reaches a couple of columns past the right border
MIN_WIDTH = DEFAULT_PLAYFIELD.width + 3

# menu states
MENU = "menu"
INSTRUCTIONS = "instructions"
PLAYING = "playing"
STATS = "stats"
EXIT = "exit"

# tick outcomes
RUNNING = "running"
QUIT_ROUND = "quit"
CRASHED = "crashed"

MENU_CHOICES = {"1": INSTRUCTIONS, "2": PLAYING, "3": STATS, "4": EXIT}

INSTRUCTIONS_TEXT = [
    "Instructions:",
    "--------------------",
    " Dodge enemy cars by moving left or right.",
    "",
    " Press 'A' or Left to move left",
    "",
    " Press 'D' or Right to move right",
    "",
    " Press 'ESC' or 'Q' to quit to menu",
    "",
    " Speed increases every 5 points, survive as long as you can!",
    "",
    "Press any key to go back to menu.",
]


class Game:
    def __init__(self, surface, keys, stats_log: StatsLog | None = None,
                 playfield: Playfield = DEFAULT_PLAYFIELD, rng=None, sleep=time.sleep):
        self.surface = surface
        self.keys = keys
        self.stats_log = stats_log if stats_log is not None else StatsLog()
        self.playfield = playfield
        self.sleep = sleep
        self.player = Player(playfield)
        self.obstacles = ObstacleSet(playfield, rng)
        self.state = MENU

    # -- menu shell --

    def run(self):
        handlers = {
            MENU: self.show_menu,
            INSTRUCTIONS: self.show_instructions,
            PLAYING: self.play,
            STATS: self.show_stats,
        }
        while self.state != EXIT:
            next_state = handlers[self.state]()
            self.state = next_state if next_state is not None else MENU

    def show_menu(self) -> str:
        s = self.surface
        s.clear()
        lines = [
            " --------------------",
            " |     CAR GAME     |",
            " --------------------",
            "1. Instructions",
            "2. Start Game",
            "3. Stats",
            "4. Quit",
            "",
            "Select Option: ",
        ]
        self.write_lines(10, 5, lines)
        s.refresh()
        return MENU_CHOICES.get(self.keys.wait_key(), MENU)

    def show_instructions(self):
        self.surface.clear()
        self.write_lines(0, 0, INSTRUCTIONS_TEXT)
        self.surface.refresh()
        self.keys.wait_key()

    def show_stats(self):
        s = self.surface
        s.clear()
        lines = [
            "===================================",
            "          GAME STATISTICS          ",
            "===================================",
            "",
        ]
        summary = self.stats_log.read()
        if summary is None or summary.empty:
            lines += ["No games played yet.", "Play a round first!"]
            self.write_lines(16, 0, lines)
        else:
            self.write_lines(16, 0, lines)
            # keep the newest rows that fit above the totals
            room = max(1, self.surface.size()[1] - len(lines) - 9)
            shown = summary.lines[-room:]
            table = [format_row(HEADER), "-" * 42] + shown
            table += [
                "",
                f"Total games played : {summary.total_games}",
                f"All-time high score: {summary.best_ever}",
            ]
            self.write_lines(2, len(lines), table)
        s.place_glyphs(0, s.size()[1] - 2, "Press any key to go back to menu.")
        s.refresh()
        self.keys.wait_key()

    def write_lines(self, col: int, row: int, lines):
        for i, line in enumerate(lines):
            self.surface.place_glyphs(col, row + i, line)

    # -- drawing --

    def draw_border(self):
        pf = self.playfield
        for row in range(pf.height):
            for col in range(BORDER_COLS):
                self.surface.place_glyphs(col, row, "+")
                self.surface.place_glyphs(pf.win_width - col, row, "+")
            self.surface.place_glyphs(pf.width, row, "+")

    def draw_sidebar(self):
        x = self.playfield.win_width
        place = self.surface.place_glyphs
        place(x + 7, 2, "CAR GAME")
        place(x + 6, 4, "----------")
        place(x + 7, 12, "Controls")
        place(x + 7, 13, "---------")
        place(x + 2, 14, " A key  - Left")
        place(x + 2, 15, " D key  - Right")
        place(x + 2, 16, " ESC    - Quit")

    def update_sidebar_stats(self):
        x = self.playfield.win_width + 7
        level = current_difficulty(self.player.score).level
        self.surface.place_glyphs(x, 5, f"Score    : {self.player.score}   ")
        self.surface.place_glyphs(x, 6, f"Best     : {self.player.high_score}   ")
        self.surface.place_glyphs(x, 7, f"Speed Lv : {level}   ")

    def draw_car(self, art=CAR_ART):
        for row, line in enumerate(art):
            self.surface.place_glyphs(self.player.position, self.playfield.player_row + row, line)

    def erase_car(self):
        self.draw_car([" " * self.playfield.sprite_width] * self.playfield.sprite_height)

    def draw_enemy(self, ob, art=ENEMY_ART):
        if not ob.active:
            return
        for row, line in enumerate(art):
            self.surface.place_glyphs(ob.x, ob.y + row, line)

    def erase_enemy(self, ob):
        self.draw_enemy(ob, [" " * self.playfield.sprite_width] * self.playfield.sprite_height)

    # -- a round --

    def start_round(self):
        self.player.reset()
        self.obstacles.reset()
        log.debug("round start, enemies %s", self.obstacles.obstacles)

    def fits_terminal(self) -> bool:
        width, height = self.surface.size()
        return width >= MIN_WIDTH and height >= self.playfield.height

    def play(self):
        if not self.fits_terminal():
            width, height = self.surface.size()
            self.surface.clear()
            self.surface.place_glyphs(0, 0, f"Terminal too small: need {MIN_WIDTH}x{self.playfield.height}, got {width}x{height}")
            self.surface.place_glyphs(0, 1, "Press any key to go back to menu.")
            self.surface.refresh()
            self.keys.wait_key()
            return MENU

        self.start_round()
        s = self.surface
        s.clear()
        self.draw_border()
        self.draw_sidebar()
        self.update_sidebar_stats()

        prompt = "Press any key to start :)"
        s.place_glyphs(BORDER_COLS + 1, 5, prompt)
        s.refresh()
        self.keys.wait_key()
        s.place_glyphs(BORDER_COLS + 1, 5, " " * len(prompt))

        while True:
            outcome = self.tick()
            if outcome == QUIT_ROUND:
                log.debug("round abandoned at score %d", self.player.score)
                return MENU
            if outcome == CRASHED:
                self.game_over()
                return MENU

    def tick(self) -> str:
        """Run one frame: input, draw, collide, sleep, erase, activate, advance, recycle."""
        player = self.player
        action = key_action(self.keys.poll_key())
        if action == MOVE_LEFT:
            player.move(LEFT)
        elif action == MOVE_RIGHT:
            player.move(RIGHT)
        elif action == QUIT:
            return QUIT_ROUND

        self.draw_car()
        for ob in self.obstacles:
            self.draw_enemy(ob)
        self.surface.refresh()

        if collides(player, self.obstacles, self.playfield):
            return CRASHED

        self.sleep(current_difficulty(player.score).tick_duration)

        self.erase_car()
        for ob in self.obstacles:
            self.erase_enemy(ob)

        self.obstacles.activate(player.score)
        self.obstacles.advance()

        for ob in self.obstacles.exited():
            self.erase_enemy(ob)
            self.obstacles.recycle(ob.index)
            before = current_difficulty(player.score).level
            player.record_pass()
            after = current_difficulty(player.score).level
            if after != before:
                log.debug("speed level %d at score %d", after, player.score)
            self.update_sidebar_stats()
        return RUNNING

    def game_over(self) -> tuple[SessionRecord, bool]:
        player = self.player
        level = current_difficulty(player.score).level
        record = SessionRecord.today(player.score, player.high_score, level)
        saved = self.stats_log.append(record)
        log.debug("game over: %s saved=%s", record, saved)

        self.surface.clear()
        note = f"Results saved to {self.stats_log.path}" if saved else "Results could not be saved"
        self.write_lines(16, 1, [
            "---------------------------------",
            "---------- Game Over :(----------",
            "---------------------------------",
            "",
            f"Score        : {player.score}",
            f"High Score   : {player.high_score}",
            f"Speed Level  : {level}",
            "",
            note,
            "",
            "Press any key to go back to menu.",
        ])
        self.surface.refresh()
        self.keys.wait_key()
        return record, saved


def run_curses():
    import curses

    def _wrapped(scr):
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        Game(CursesSurface(scr), CursesKeys(scr)).run()

    curses.wrapper(_wrapped)


def run_nocurses():
    keys = ConsoleKeys()
    try:
        Game(ConsoleSurface(MIN_WIDTH, DEFAULT_PLAYFIELD.height), keys).run()
    finally:
        keys.close()


def main():
    setup_logging()
    # curses when it imports (windows-curses on Windows), plain console otherwise
    use_curses = False
    try:
        import curses  # noqa: F401
        use_curses = True
    except ImportError:
        use_curses = False

    try:
        if use_curses:
            run_curses()
        else:
            log.info("curses not available, using plain console mode")
            run_nocurses()
    except KeyboardInterrupt:
        print("\nQuit")
    finally:
        flush_logging()


if __name__ == "__main__":
    main()
