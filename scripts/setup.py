#!/usr/bin/env python3
"""
Bootstrap script for ember-telemetry.
Installs the project and the Chromium build Playwright drives.
"""

import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def run_command(cmd, description):
    """Run a command and report status."""
    print(f"\n📦 {description}...")
    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True)
        print(f"✅ {description} completed")
        if result.stdout:
            print(result.stdout)
        return True
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed")
        if e.stderr:
            print(e.stderr)
        return False


def main():
    print("🚀 Setting up ember-telemetry...")

    if sys.version_info < (3, 8):
        print("❌ Python 3.8+ required")
        sys.exit(1)

    if not run_command(
        [sys.executable, "-m", "pip", "install", "-e", f"{PROJECT_ROOT}[test]"],
        "Installing ember-telemetry"
    ):
        sys.exit(1)

    if not run_command(
        [sys.executable, "-m", "playwright", "install", "chromium"],
        "Installing Chromium browser"
    ):
        sys.exit(1)

    print("\n✅ Setup complete! With your Ember app running, try:")
    print("   ember-telemetry http://localhost:4200 --output telemetry.json")


if __name__ == "__main__":
    main()
