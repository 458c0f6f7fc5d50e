"""``python -m setupcheck`` runs the same command as the console script."""

from .cli import cli


def main() -> None:
    # Without prog_name click would report usage as "python -m setupcheck"
    cli(prog_name="setupcheck")


if __name__ == "__main__":  # pragma: no cover
    main()
