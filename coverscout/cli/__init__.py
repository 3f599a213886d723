"""Command-line tools for coverscout.

- ``python -m coverscout.cli.scrape covers|covered <artist>`` — look up one
  page of cover relationships and print the JSON envelope.
- ``python -m coverscout.cli`` — same as above.

Uses argparse, and constructs its own fetcher/service per run rather than
going through the FastAPI app, since a CLI invocation is a one-shot script.
"""
