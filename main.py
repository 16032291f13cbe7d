#!/usr/bin/env python3
"""
NFT Folio CLI entrypoint
"""

from nft_folio.cli import app


if __name__ == "__main__":
    app()
