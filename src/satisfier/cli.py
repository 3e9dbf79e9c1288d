"""
Satisfier CLI: check formulas, list stored formulas, or run the interactive
prompt loop.
"""
import argparse
import sys
import warnings

import yaml

from satisfier.config import SatisfierConfig
from satisfier.parser import parse_pre_assignments
from satisfier.satisfier import SolveOutcome
from satisfier.session import FormulaSession
from satisfier.utils.exceptions import SatisfierError, UnknownVariableWarning
from satisfier.utils.logging_utils import configure_logging

FORMULA_EXAMPLE = '("R" OR "S") AND ("C" OR NOT "H") AND ("W" OR NOT "C")'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="satisfier",
        description="Check satisfiability of formulas in conjunctive normal form.",
    )
    parser.add_argument("--config", type=str, help="YAML or JSON configuration file")
    parser.add_argument("--repository", type=str, help="JSON file of stored formulas")
    parser.add_argument("--strategy", choices=["stack", "recursive"])
    parser.add_argument("--negation-policy", choices=["flip", "tseitin"])
    parser.add_argument("--log-level", type=str, help="Logging level, e.g. DEBUG")
    parser.add_argument("--trace-dir", type=str, help="Write JSONL search traces here")
    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser("check", help="Check and store a formula")
    check_parser.add_argument("name")
    check_parser.add_argument("formula", help=f"e.g. {FORMULA_EXAMPLE}")
    check_parser.add_argument(
        "--assign", type=str, default="", help="Initial assignments, e.g. 'R := true, S := false'"
    )
    check_parser.add_argument("--comment", type=str)

    list_parser = subparsers.add_parser("list", help="Show stored formulas")
    list_parser.add_argument("--format", choices=["text", "yaml"], default="text")

    subparsers.add_parser("interactive", help="Prompt for formulas in a loop")
    return parser


def make_config(args: argparse.Namespace) -> SatisfierConfig:
    """Load the configuration file and apply command line overrides."""
    config = SatisfierConfig(args.config)
    overrides = {
        "repository.path": args.repository,
        "solver.strategy": args.strategy,
        "parser.negation_policy": args.negation_policy,
        "logging.level": args.log_level,
        "logging.trace_dir": args.trace_dir,
    }
    for key, value in overrides.items():
        if value is not None:
            config.set(key, value)
    if args.repository is not None:
        config.set("repository.type", "json")
    return config


def print_outcome(name: str, outcome: SolveOutcome, out) -> None:
    if not outcome.is_sat:
        print(f"{name} is UNSATISFIABLE", file=out)
        return
    print(f"{name} is SATISFIABLE", file=out)
    print(f"Assignments for {name}:", file=out)
    for var_name, value in outcome.assignment.items():
        print(f"{var_name} : {str(value).lower()}", file=out)


def print_formulas(session: FormulaSession, out, fmt: str = "text") -> None:
    records = session.formulas()
    if fmt == "yaml":
        data = [
            {
                "name": r.name,
                "formula": r.text,
                "assignment": r.assignment,
                "comment": r.comment,
            }
            for r in records
        ]
        out.write(yaml.safe_dump(data, sort_keys=False, allow_unicode=True))
        return

    print("Stored formulas:", file=out)
    if not records:
        print("No formula stored.", file=out)
    for record in records:
        print(f"{record.name} := {record.text}", file=out)
        if record.comment:
            print(f"  # {record.comment}", file=out)
        for var_name, value in record.assignment.items():
            print(f"  {var_name} := {str(value).lower()}", file=out)


def check_formula(session, name, text, assign_text, comment, out, err) -> SolveOutcome:
    """Run one check, reporting skipped pre-assignments on `err`."""
    pre_assignments = parse_pre_assignments(assign_text)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", UnknownVariableWarning)
        outcome = session.check(name, text, pre_assignments, comment)
    for warning in caught:
        print(f"Warning: {warning.message}.", file=err)
    print_outcome(name, outcome, out)
    return outcome


def run_interactive(session: FormulaSession, input_fn=input, out=sys.stdout, err=sys.stderr) -> None:
    """
    Prompt loop: 1 checks a new formula, 2 lists stored formulas, 3 exits.

    Errors in one formula are reported and the loop continues. End of input
    at any prompt exits the loop.
    """
    print(
        "Satisfier checks satisfiability of a formula in Conjunctive Normal Form (CNF).",
        file=out,
    )
    while True:
        try:
            option = input_fn(
                "Enter 1 to check a new formula, 2 to view stored formulas, or 3 to exit: "
            ).strip()
            if option == "1":
                name = input_fn("Enter formula name: ").strip()
                text = input_fn(f"Enter CNF of {name} e.g., {FORMULA_EXAMPLE}:\n").strip()
                assign_text = input_fn(
                    "Enter initial assignments (e.g., R := true, S := false) or leave blank: "
                ).strip()
                comment = input_fn("Enter a comment or leave blank: ").strip() or None
        except EOFError:
            option = "3"

        if option == "1":
            try:
                check_formula(session, name, text, assign_text, comment, out, err)
            except SatisfierError as e:
                print(f"error: {e}", file=err)
        elif option == "2":
            print_formulas(session, out)
        elif option == "3":
            print("Exiting.", file=out)
            return
        else:
            print("Invalid option.", file=out)


def main(argv=None, out=sys.stdout, err=sys.stderr) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help(file=out)
        return 1

    try:
        config = make_config(args)
        configure_logging(
            config.get("logging.level", "INFO"),
            config.get("logging.format"),
            config.get("logging.file"),
        )
        with FormulaSession(config=config) as session:
            if args.command == "check":
                outcome = check_formula(
                    session, args.name, args.formula, args.assign, args.comment, out, err
                )
                return 0 if outcome.is_sat else 1
            elif args.command == "list":
                print_formulas(session, out, args.format)
            elif args.command == "interactive":
                run_interactive(session, out=out, err=err)
    except SatisfierError as e:
        print(f"error: {e}", file=err)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
