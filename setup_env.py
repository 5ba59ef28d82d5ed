"""Post-clone environment setup helper.

Run once after creating the virtualenv and installing the package:

    python -m venv .venv
    pip install -e ".[test]"
    python setup_env.py

This script:
1. Verifies all required imports resolve correctly.
2. Checks that .env / config.yaml provide both API keys.
3. Prints a clear summary of what passed.
"""

import sys


def verify_imports() -> None:
    print("Verifying core imports...")
    required = [
        ("requests", "requests"),
        ("yaml", "PyYAML"),
        ("dotenv", "python-dotenv"),
    ]
    all_ok = True
    for mod, pkg in required:
        try:
            __import__(mod)
            print(f"  [OK] {pkg}")
        except ImportError:
            print(f"  [MISSING] {pkg}  →  run: pip install {pkg}")
            all_ok = False

    if not all_ok:
        print("\nSome packages are missing. Run:  pip install -e .")
        sys.exit(1)


def verify_pipeline_imports() -> None:
    print("\nVerifying pipeline source imports...")
    try:
        from weather_news.providers.geocoding import OpenWeatherGeocoder  # noqa: F401
        from weather_news.providers.weather import OpenWeatherProvider  # noqa: F401
        from weather_news.providers.news import NewsApiProvider  # noqa: F401
        from weather_news.pipeline.engine import PipelineEngine  # noqa: F401
        print("  [OK] All pipeline modules import cleanly.")
    except Exception as exc:
        print(f"  [ERROR] Pipeline import failed: {exc}")
        sys.exit(1)


def verify_api_keys() -> None:
    print("\nChecking API keys...")
    from weather_news.core.config import build_settings, load_config
    from weather_news.core.errors import ConfigError

    try:
        build_settings(load_config())
        print("  [OK] WEATHER_API_KEY and NEWS_API_KEY are set.")
    except (FileNotFoundError, ValueError, ConfigError) as exc:
        print(f"  [WARN] {exc}")
        print("         Copy .env.example to .env and fill in both keys.")


if __name__ == "__main__":
    print("=" * 60)
    print("  Weather & News: Environment Setup Check")
    print("=" * 60)
    verify_imports()
    verify_pipeline_imports()
    verify_api_keys()
    print("\n" + "=" * 60)
    print("  Setup complete. You can now run: python run_app.py")
    print("=" * 60)
