"""CLI entry point for fuzzkill."""

import click


@click.command()
@click.argument("query")
@click.option("--force", "-f", is_flag=True, help="Kill every match without asking")
@click.option("--regex", "-r", "use_regex", is_flag=True, help="Treat QUERY as a regex")
@click.option("--details", "-d", is_flag=True, help="Show a table of matches first")
@click.option("--interactive", "-i", is_flag=True, help="Always ask, even with --force")
@click.version_option()
def main(query: str, force: bool, use_regex: bool, details: bool, interactive: bool) -> None:
    """Fuzzy process killer.

    Finds processes whose name or command line fuzzy-matches QUERY (or
    matches it as a regex with -r), lets you pick which ones to kill, and
    kills them.
    """
    from fuzzkill import logging as console
    from fuzzkill.config import Config
    from fuzzkill.formatting import records_table
    from fuzzkill.grouping import build_choices, expand
    from fuzzkill.picker import pick
    from fuzzkill.ranker import discover, records_of
    from fuzzkill.snapshot import ProcessSnapshot
    from fuzzkill.terminator import kill

    try:
        config = Config.load()
    except ValueError as e:
        console.config_invalid(str(e))
        raise SystemExit(2)

    console.configure(config)
    log = console.get_structlog()

    with console.status("Getting processes..."):
        candidates = discover(
            ProcessSnapshot(),
            query,
            use_regex=use_regex,
            min_score_per_char=config.matching.min_score_per_char,
        )
    log.info("discovered", query=query, regex=use_regex, matches=len(candidates))

    if not candidates:
        console.no_matches(query)
        return

    console.matches_found(len(candidates), query)
    if details:
        console.render(records_table(records_of(candidates)))

    if force and not interactive:
        selection = records_of(candidates)
    else:
        selection = expand(pick(build_choices(candidates)))
    log.info(
        "selected",
        forced=force and not interactive,
        processes=[r.to_dict() for r in selection],
    )

    code = kill(
        selection,
        graceful=config.terminate.graceful,
        wait_timeout=config.terminate.wait_timeout,
    )
    if code:
        raise SystemExit(code)
