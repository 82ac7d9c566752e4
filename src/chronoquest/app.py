"""Interactive CLI application."""
import logging
import time

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from chronoquest.achievements import ACHIEVEMENTS, award_achievements
from chronoquest.catalog import load_catalog
from chronoquest.config import DEFAULT_DB_PATH, EVENTS_PATH, IMAGES_DIR, LOG_LEVEL
from chronoquest.dashboard import get_era_progress, get_mode_summary, get_profile_stats, get_recent_games
from chronoquest.db import init_db
from chronoquest.engine import SessionEngine
from chronoquest.models import MASCOTS, AnswerStatus, Era, GameMode
from chronoquest.profile import (
    complete_onboarding, load_profile, record_game_result, update_daily_streak, update_name,
)
from chronoquest.scoring import format_year, get_star_rating
from chronoquest.visuals import ImageRegistry

console = Console()

ANSWER_PROMPTS = {
    GameMode.CLASSIC: "What year did it happen? (e.g. 1776 or 44 BCE)",
    GameMode.TIMED: "What year did it happen? (e.g. 1776 or 44 BCE)",
    GameMode.DAILY: "What year did it happen? (e.g. 1776 or 44 BCE)",
    GameMode.ERA: "Which era? (" + ", ".join(e.value for e in Era) + ")",
    GameMode.MAP: "Where did it happen?",
}


class SessionExitRequested(Exception):
    """The player typed q or menu in the middle of a game."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer is not None and answer.strip().lower() in ("q", "menu"):
        raise SessionExitRequested()
    return answer or ""


def show_welcome():
    console.print(Panel(
        "[bold]Chronoquest[/bold]\n[dim]Guess the year, era and place of history's big moments[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("classic", "Guess the year"),
        ("timed", "Guess the year against the clock"),
        ("daily", "Today's daily discovery"),
        ("era", "Era explorer"),
        ("map", "Map quest"),
        ("timeline", "Put events in order"),
        ("profile", "Stats and achievements"),
        ("name", "Change your explorer name"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def show_question(engine: SessionEngine) -> None:
    s = engine.session
    event = s.current_event
    lines = [f"[bold]{event.name}[/bold]"]
    if event.description:
        lines.append(f"[dim]{event.description}[/dim]")
    if s.image_uri:
        lines.append(f"[dim]Image: {s.image_uri}[/dim]")
    header = f"Event {s.current_index + 1}/{len(s.events)}  |  Score {s.score}  |  Streak {s.streak}"
    if s.is_timed:
        header += f"  |  {s.time_remaining}s"
    console.print(Panel("\n".join(lines), title=header, border_style="cyan"))
    console.print("[dim]Type 'hint' for a clue, 'skip' to give up, 'q' to leave.[/dim]")


def show_feedback(engine: SessionEngine) -> None:
    s = engine.session
    event = s.current_event
    if s.is_correct:
        console.print("[green]Correct![/green]")
    else:
        console.print("[red]Not this time.[/red]")
    console.print(
        f"  {event.name}: [bold]{format_year(event.year)}[/bold], "
        f"{event.location} ({event.era.label})"
    )
    if event.fun_fact:
        console.print(f"  [dim]Fun fact: {event.fun_fact}[/dim]")
    console.print()


def ask_question(engine: SessionEngine) -> None:
    s = engine.session
    prompt = ANSWER_PROMPTS[s.mode]
    started = time.monotonic()
    ticked = 0
    while not s.is_answered:
        raw = session_prompt(prompt)
        if s.is_timed:
            elapsed = int(time.monotonic() - started)
            engine.tick(elapsed - ticked)
            ticked = elapsed
            if s.is_answered:
                console.print("[red]Time's up![/red]")
                break
        command = raw.strip().lower()
        if command == "hint":
            hint = engine.reveal_hint()
            if hint:
                console.print(f"[yellow]Hint {s.hints_revealed}:[/yellow] {hint}")
            else:
                console.print("[dim]No more hints for this event.[/dim]")
            continue
        if command in ("skip", "give up"):
            engine.give_up()
            break
        result = engine.submit_answer(raw)
        if result.status == AnswerStatus.CORRECT:
            console.print(f"[green]+{result.points} points[/green]")
        elif result.status == AnswerStatus.RETRY:
            console.print(f"[yellow]Not quite.[/yellow] {result.guesses_left} guess(es) left.")
        if result.is_final:
            break


def run_question_game(db_path: str, engine: SessionEngine) -> None:
    s = engine.session
    if not s.events:
        console.print("[yellow]No events available![/yellow]")
        return
    console.print(f"\n[bold]{s.mode.label}[/bold] — {len(s.events)} events\n")
    while True:
        show_question(engine)
        ask_question(engine)
        show_feedback(engine)
        if engine.is_game_complete:
            break
        session_prompt("[dim]Press Enter for the next event[/dim]", default="")
        engine.next_event()
    finish_game(db_path, engine)


def show_timeline(engine: SessionEngine) -> None:
    table = Table(title="Your order (earliest first)")
    table.add_column("#", justify="right")
    table.add_column("Event")
    for i, event in enumerate(engine.timeline.session.user_order, 1):
        table.add_row(str(i), event.name)
    console.print(table)


def run_timeline_game(db_path: str, engine: SessionEngine) -> None:
    timeline = engine.timeline.session
    if not timeline.events:
        console.print("[yellow]No events available![/yellow]")
        return
    console.print("\n[bold]Timeline[/bold] — drag events into chronological order")
    console.print("[dim]Commands: 'move <from> <to>', 'submit', 'q' to leave.[/dim]")
    while not timeline.is_submitted:
        show_timeline(engine)
        command = session_prompt("Command").strip().lower().split()
        if not command:
            continue
        if command[0] == "submit":
            engine.submit_timeline()
        elif command[0] == "move" and len(command) == 3 and all(c.isdigit() for c in command[1:]):
            size = len(timeline.user_order)
            from_index = min(max(int(command[1]) - 1, 0), size - 1)
            to_index = min(max(int(command[2]) - 1, 0), size - 1)
            engine.move_timeline_event(from_index, to_index)
        else:
            console.print("[red]Unknown command. Try 'move 1 3' or 'submit'.[/red]")

    table = Table(title=f"{timeline.correct_placements}/{len(timeline.events)} in the right place")
    table.add_column("Your order")
    table.add_column("Correct order")
    table.add_column("Year", justify="right")
    for placed, expected in zip(timeline.user_order, timeline.events):
        style = "green" if placed is expected else "red"
        table.add_row(f"[{style}]{placed.name}[/{style}]", expected.name, format_year(expected.year))
    console.print(table)
    finish_game(db_path, engine)


def finish_game(db_path: str, engine: SessionEngine) -> None:
    outcome = engine.outcome()
    profile = record_game_result(db_path, outcome)
    if outcome.mode == GameMode.DAILY:
        streak = update_daily_streak(db_path, engine.session.date_key)
        console.print(f"[magenta]Daily streak: {streak} day(s)[/magenta]")
    stars = get_star_rating(outcome.score, outcome.total_count)
    console.print(Panel(
        f"Score: [bold]{outcome.score}[/bold]  {'★' * stars}{'☆' * (3 - stars)}\n"
        f"Correct: {outcome.correct_count}/{outcome.total_count}  |  Best streak: {outcome.best_streak}\n"
        f"[dim]Best score ever: {profile.best_score}[/dim]",
        title=f"{outcome.mode.label} complete", border_style="green",
    ))
    for achievement in award_achievements(db_path, outcome):
        console.print(f"[yellow]Achievement unlocked:[/yellow] [bold]{achievement.name}[/bold] — {achievement.description}")


def cmd_profile(db_path: str, catalog) -> None:
    profile = load_profile(db_path)
    stats = get_profile_stats(db_path)
    console.print(Panel(
        f"[bold]{profile.name}[/bold] [dim]({profile.mascot})[/dim]\n"
        f"Games: [bold]{stats['games_played']}[/bold]  |  Total: [bold]{stats['total_score']}[/bold]  |  "
        f"Best: [bold]{stats['best_score']}[/bold]  |  Accuracy: [bold]{stats['accuracy']}%[/bold]\n"
        f"Best streak: {stats['best_streak']}  |  Daily streak: {stats['daily_streak']}  |  "
        f"Events seen: {stats['events_seen']}/{len(catalog)}",
        title="Explorer Profile", border_style="blue",
    ))

    modes = get_mode_summary(db_path)
    if modes:
        table = Table(title="By Mode")
        table.add_column("Mode", style="cyan")
        table.add_column("Games", justify="right")
        table.add_column("Best", justify="right")
        table.add_column("Average", justify="right")
        table.add_column("Accuracy", justify="right")
        for m in modes:
            table.add_row(m["label"], str(m["games"]), str(m["best_score"]),
                          str(m["avg_score"]), f"{m['accuracy']}%")
        console.print(table)

    table = Table(title="Eras Explored")
    table.add_column("Era", style="cyan")
    table.add_column("Span", style="dim")
    table.add_column("Seen", justify="right")
    for era in get_era_progress(db_path, catalog):
        table.add_row(era["label"], era["era"].span, f"{era['seen']}/{era['total']}")
    console.print(table)

    recent = get_recent_games(db_path, limit=5)
    if recent:
        table = Table(title="Recent Games")
        table.add_column("Played", style="dim")
        table.add_column("Mode", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Correct", justify="right")
        for g in recent:
            table.add_row((g["played_at"] or "")[:16].replace("T", " "), GameMode(g["mode"]).label,
                          str(g["score"]), f"{g['correct_count']}/{g['total_count']}")
        console.print(table)

    console.print("\n[bold]Achievements:[/bold]")
    for a in ACHIEVEMENTS:
        mark = "[green]✓[/green]" if a.id in profile.achievements else "[dim]·[/dim]"
        console.print(f"  {mark} {a.name} [dim]— {a.description}[/dim]")


def cmd_name(db_path: str) -> None:
    name = Prompt.ask("New name")
    update_name(db_path, name)
    console.print(f"[green]You are now {load_profile(db_path).name}.[/green]")


def run_onboarding(db_path: str) -> None:
    console.print("[bold]Welcome, explorer! Let's set up your profile.[/bold]")
    name = Prompt.ask("Your name", default="Explorer")
    mascot = Prompt.ask("Pick a mascot", choices=list(MASCOTS), default=MASCOTS[0])
    complete_onboarding(db_path, name, mascot)


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main():
    setup_logging()
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    catalog = load_catalog(EVENTS_PATH)
    engine = SessionEngine(catalog, image_lookup=ImageRegistry(IMAGES_DIR))

    if not load_profile(db_path).has_completed_onboarding:
        run_onboarding(db_path)

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="classic").strip().lower()
        try:
            if choice == "classic":
                engine.start_classic_game()
                run_question_game(db_path, engine)
            elif choice == "timed":
                engine.start_classic_game(is_timed=True)
                run_question_game(db_path, engine)
            elif choice == "daily":
                engine.start_daily_challenge()
                run_question_game(db_path, engine)
            elif choice == "era":
                engine.start_era_explorer()
                run_question_game(db_path, engine)
            elif choice == "map":
                engine.start_map_quest()
                run_question_game(db_path, engine)
            elif choice == "timeline":
                engine.start_timeline()
                run_timeline_game(db_path, engine)
            elif choice == "profile":
                cmd_profile(db_path, catalog)
            elif choice == "name":
                cmd_name(db_path)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]See you next time, explorer![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except SessionExitRequested:
            console.print("[dim]Game abandoned.[/dim]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
