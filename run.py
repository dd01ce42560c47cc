#!/usr/bin/env python3
"""
Simple launcher script for the Telegram video download bot.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

# Import and run main
from main import main
import asyncio

if __name__ == "__main__":
    print("🤖 Starting Telegram video download bot...")
    print("📹 /download <url> -> yt-dlp -> Azure Blob Storage link")
    print("=" * 60)

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n👋 Bot stopped by user")
    except Exception as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)
