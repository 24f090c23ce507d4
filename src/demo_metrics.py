from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from sentimetrics.core import Orchestrator, OrchestratorConfig, SentimentHistory
from sentimetrics.news import NewsCache, NewsFetcher, RawArticle, StaticNewsProvider
from sentimetrics.sentiment import SentimentAnalyzer, StaticSentimentClient

DEMO_ARTICLES = [
    RawArticle(
        title="Dollar rally extends as EUR/USD slides on weak eurozone data",
        description="Trading volume spiked as the euro fell to a two-month low.",
        content=None,
        source_id="demo",
        pub_date="2024-05-02 08:15:00",
        link="https://example.com/a",
    ),
    RawArticle(
        title="Yen recovers after BoJ comments; USD/JPY drops below 155",
        description="Liquidity thin ahead of the holiday.",
        content=None,
        source_id="demo",
        pub_date="2024-05-02 07:40:00",
        link="https://example.com/b",
    ),
    RawArticle(
        title="Sterling steady; GBP/USD traders await inflation figures",
        description=None,
        content="Markets expect a modest decline in headline CPI.",
        source_id="demo",
        pub_date="2024-05-02 06:55:00",
        link="https://example.com/c",
    ),
]

DEMO_REPLY = """Here is my assessment.
SENTIMENT: 0.64
POSITIVE SIGNAL: Broad USD demand on rate differentials | CONFIDENCE: 78
POSITIVE SIGNAL: Yen recovery reduces intervention risk | CONFIDENCE: 55
NEGATIVE SIGNAL: Eurozone growth slowdown | CONFIDENCE: 70
NEGATIVE SIGNAL: Thin holiday liquidity | CONFIDENCE: 40
ANALYSIS: The dollar remains supported while the euro weakens. Holiday liquidity may exaggerate moves."""


def build_offline_orchestrator(logger: logging.Logger, config: OrchestratorConfig) -> Orchestrator:
    fetcher = NewsFetcher(provider=StaticNewsProvider(items=list(DEMO_ARTICLES)), cache=NewsCache())
    analyzer = SentimentAnalyzer(service=StaticSentimentClient(reply=DEMO_REPLY))
    return Orchestrator(
        logger=logger,
        config=config,
        fetcher=fetcher,
        analyzer=analyzer,
        history=SentimentHistory(),
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    logger = logging.getLogger("sentimetrics")

    orchestrator = build_offline_orchestrator(logger, OrchestratorConfig())
    orchestrator.run_cycle()

    state = orchestrator.latest()
    print(json.dumps(state.to_dict(), indent=2))


if __name__ == "__main__":
    main()
