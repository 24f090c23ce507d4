#!/usr/bin/env python3
"""Run the sentiment refresh loop and print each dashboard state as JSON.

Usage
  python src/sentimetrics_orchestrator.py --once
  python src/sentimetrics_orchestrator.py --duration-seconds 1800
  python src/sentimetrics_orchestrator.py --once --pairs
  python src/sentimetrics_orchestrator.py --offline --once

Environment (see sentimetrics.config.Settings)
  NEWSDATA_API_KEY, GROQ_API_KEY (or SENTIMENT_BACKEND=gemini + GOOGLE_API_KEY)
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from dotenv import load_dotenv

from sentimetrics.config import Settings
from sentimetrics.core import DashboardState, Orchestrator, OrchestratorConfig, SentimentHistory
from sentimetrics.errors import SentimetricsError
from sentimetrics.news import NewsCache, NewsDataProvider, NewsFetcher
from sentimetrics.sentiment import CurrencyPairAnalyzer, SentimentAnalyzer, make_sentiment_client, sentiment_distribution

REPO_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=REPO_ROOT / ".env")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_orchestrator(settings: Settings, config: OrchestratorConfig) -> Orchestrator:
    provider = NewsDataProvider(
        api_key=settings.newsdata_api_key,
        base_url=settings.newsdata_base_url,
        timeout_seconds=settings.news_provider_timeout_seconds,
    )
    fetcher = NewsFetcher(provider=provider, cache=NewsCache(ttl_seconds=settings.news_cache_ttl_seconds))
    analyzer = SentimentAnalyzer(service=make_sentiment_client(settings))
    return Orchestrator(
        logger=logging.getLogger("sentimetrics"),
        config=config,
        fetcher=fetcher,
        analyzer=analyzer,
        history=SentimentHistory(capacity=settings.history_capacity),
    )


def print_state(state: DashboardState) -> None:
    print(json.dumps(state.to_dict(), ensure_ascii=False, indent=2), flush=True)


def print_pairs(orchestrator: Orchestrator) -> None:
    batch = orchestrator.fetcher.retry_fetch(orchestrator.config.category, max_retries=orchestrator.config.max_retries)
    rows = CurrencyPairAnalyzer(analyzer=orchestrator.analyzer).analyze(batch.articles)
    out = {
        "pairs": [r.to_dict() for r in rows],
        "distribution": sentiment_distribution(rows).to_dict(),
    }
    print(json.dumps(out, ensure_ascii=False, indent=2), flush=True)


def main() -> None:
    settings = Settings()

    parser = argparse.ArgumentParser(description="News-driven market sentiment refresh loop")
    parser.add_argument("--once", action="store_true", help="Run a single cycle and exit")
    parser.add_argument(
        "--duration-seconds",
        type=int,
        default=3600,
        help="How long to keep the refresh loop running (default: 3600)",
    )
    parser.add_argument(
        "--interval-seconds",
        type=float,
        default=settings.refresh_interval_seconds,
        help="Refresh interval (default: REFRESH_INTERVAL_SECONDS or 300)",
    )
    parser.add_argument("--pairs", action="store_true", help="Also print the per currency-pair breakdown")
    parser.add_argument("--offline", action="store_true", help="Use canned news and sentiment (no API keys)")
    args = parser.parse_args()

    config = OrchestratorConfig(
        refresh_interval_seconds=args.interval_seconds,
        max_retries=settings.news_max_retries,
    )

    try:
        if args.offline:
            from demo_metrics import build_offline_orchestrator

            orchestrator = build_offline_orchestrator(logging.getLogger("sentimetrics"), config)
        else:
            orchestrator = build_orchestrator(settings, config)
    except SentimetricsError as e:
        logger.error("[FATAL] Init failed. ", exc_info=True)
        raise SystemExit(1) from e

    if args.once:
        orchestrator.run_cycle()
        state = orchestrator.latest()
        print_state(state)
        if args.pairs and state.has_data:
            print_pairs(orchestrator)
        raise SystemExit(0 if state.has_data else 1)

    orchestrator.subscribe(print_state)
    orchestrator.start()
    try:
        time.sleep(max(0, args.duration_seconds))
    except KeyboardInterrupt:
        logger.info("[INTERRUPT] Refresh loop interrupted")
    finally:
        orchestrator.stop()

    if args.pairs:
        print_pairs(orchestrator)


if __name__ == "__main__":
    main()
