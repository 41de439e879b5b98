"""
Seed the database with fixture matches and their rosters

Run with: python -m prono.scripts.seed_matches
"""

import asyncio
import logging
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from prono.core.config import get_settings
from prono.core.logging_config import setup_logging
from prono.database import Database, create_indexes
from prono.models.match import Match, MatchCreate, Player
from prono.repositories.match_repository import MatchRepository
from prono.services.match_service import MatchService

logger = logging.getLogger(__name__)


def _roster(team: str, names: list[str]) -> list[Player]:
    return [Player(name=name, team=team) for name in names]


FIXTURES = [
    MatchCreate(
        team_a="Maroc",
        team_b="Sénégal",
        match_date=datetime(2026, 1, 15, 20, 0, tzinfo=timezone.utc),
        players=_roster("A", [
            "Yassine Bounou", "Achraf Hakimi", "Nayef Aguerd", "Romain Saïss",
            "Sofyan Amrabat", "Azzedine Ounahi", "Hakim Ziyech",
            "Youssef En-Nesyri", "Sofiane Boufal", "Amine Harit", "Selim Amallah",
        ]) + _roster("B", [
            "Édouard Mendy", "Kalidou Koulibaly", "Abdou Diallo", "Youssouf Sabaly",
            "Idrissa Gueye", "Pape Matar Sarr", "Ismaïla Sarr", "Sadio Mané",
            "Boulaye Dia", "Iliman Ndiaye", "Nicolas Jackson",
        ]),
    ),
    MatchCreate(
        team_a="Côte d'Ivoire",
        team_b="Nigeria",
        match_date=datetime(2026, 1, 18, 17, 0, tzinfo=timezone.utc),
        players=_roster("A", [
            "Yahia Fofana", "Serge Aurier", "Willy Boly", "Evan Ndicka",
            "Ghislain Konan", "Franck Kessié", "Seko Fofana", "Max Gradel",
            "Sébastien Haller", "Nicolas Pépé", "Simon Adingra",
        ]) + _roster("B", [
            "Stanley Nwabali", "William Troost-Ekong", "Calvin Bassey", "Ola Aina",
            "Zaidu Sanusi", "Alex Iwobi", "Frank Onyeka", "Ademola Lookman",
            "Victor Osimhen", "Moses Simon", "Kelechi Iheanacho",
        ]),
    ),
]


async def seed_matches(
    db: AsyncIOMotorDatabase,
    fixtures: list[MatchCreate] = FIXTURES
) -> list[Match]:
    """
    Insert the fixtures that are not in the database yet.

    A fixture counts as present when a match with the same teams and kickoff
    exists. Returns the matches created by this run.
    """
    match_repo = MatchRepository(db)
    match_service = MatchService(db)
    now = datetime.now(timezone.utc)

    created = []
    for fixture in fixtures:
        existing = await match_repo.get_by_teams_and_date(
            fixture.team_a, fixture.team_b, fixture.match_date
        )
        if existing:
            logger.info("Skipping %s vs %s, already seeded", fixture.team_a, fixture.team_b)
            continue

        created.append(await match_service.create_match(fixture, now))

    return created


async def main():
    setup_logging(get_settings().log_level)
    await Database.connect()
    try:
        db = Database.get_db()
        await create_indexes(db)
        created = await seed_matches(db)
        logger.info("✅ %d matches created", len(created))
    finally:
        await Database.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
