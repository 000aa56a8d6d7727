from pathlib import Path

from rich.console import Console

from screener_engine import ScreenerEngine, get_outcome_summary, load_answers, load_definition

here = Path(__file__).parent

engine = ScreenerEngine(load_definition(here / "statin_screener.json"))

console = Console()

for name in ("answers_ok.json", "answers_incomplete.json"):
    answers = load_answers(here / name)
    result = engine.evaluate(answers)
    console.print(f"[bold]{name}[/bold]")
    console.print(result.to_dict())
    console.print(get_outcome_summary(result))
