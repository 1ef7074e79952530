from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from drawcalc.balances import CheckpointBalanceProvider, StaticBalanceProvider
from drawcalc.calculator import Draw, DrawSettings, derive_user_random_number
from drawcalc.errors import AuthorizationError, InsufficientPicksError
from drawcalc.fixed_point import to_fixed
from drawcalc.models import BalanceCheckpoint, Base
from drawcalc.workflows import (
    record_balance_checkpoint,
    settle_user_prizes,
    submit_draw_settings,
)

OWNER = "0x" + "11" * 20
USER = "0x" + "b2" * 20

SETTINGS = DrawSettings(
    range=10,
    match_cardinality=8,
    pick_cost=to_fixed(1),
    distributions=(to_fixed("0.8"), to_fixed("0.2")),
)


class BalanceProviderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(
            bind=self.engine, future=True, expire_on_commit=False
        )

    def tearDown(self) -> None:
        self.engine.dispose()

    def test_checkpoint_lookup_uses_balance_as_of_timestamp(self) -> None:
        with self.Session.begin() as session:
            record_balance_checkpoint(session, USER, 10, to_fixed(5))
            record_balance_checkpoint(session, USER, 50, to_fixed(2))
            provider = CheckpointBalanceProvider(session)

            balances = provider.get_balances(USER, [5, 10, 42, 50, 99])

        self.assertEqual(
            balances, [0, to_fixed(5), to_fixed(5), to_fixed(2), to_fixed(2)]
        )

    def test_checkpoints_are_per_user(self) -> None:
        other = "0x" + "c3" * 20
        with self.Session.begin() as session:
            record_balance_checkpoint(session, other, 10, to_fixed(5))
            provider = CheckpointBalanceProvider(session)
            self.assertEqual(provider.get_balances(USER, [42]), [0])

    def test_recording_same_timestamp_overwrites(self) -> None:
        with self.Session.begin() as session:
            record_balance_checkpoint(session, USER, 10, to_fixed(5))
            record_balance_checkpoint(session, USER.upper().replace("0X", "0x"), 10, to_fixed(7))
            count = session.scalar(select(func.count()).select_from(BalanceCheckpoint))
            self.assertEqual(count, 1)
            self.assertEqual(
                CheckpointBalanceProvider(session).get_balances(USER, [10]),
                [to_fixed(7)],
            )

    def test_negative_balance_rejected(self) -> None:
        with self.Session.begin() as session:
            with self.assertRaises(ValueError):
                record_balance_checkpoint(session, USER, 10, -1)

    def test_static_provider_defaults_to_zero(self) -> None:
        provider = StaticBalanceProvider({(USER, 42): 3})
        self.assertEqual(provider.get_balances(USER, [42, 43]), [3, 0])


class SettlementWorkflowTests(unittest.TestCase):
    def setUp(self) -> None:
        dotenv_patcher = patch("drawcalc.config.load_dotenv")
        dotenv_patcher.start()
        self.addCleanup(dotenv_patcher.stop)
        env_patcher = patch.dict(os.environ, {"DRAWCALC_OWNER": OWNER}, clear=True)
        env_patcher.start()
        self.addCleanup(env_patcher.stop)

        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(
            bind=self.engine, future=True, expire_on_commit=False
        )

    def tearDown(self) -> None:
        self.engine.dispose()

    def test_settle_user_prizes_end_to_end(self) -> None:
        with self.Session.begin() as session:
            submit_draw_settings(session, OWNER, SETTINGS)
            record_balance_checkpoint(session, USER, 40, to_fixed(10))

        winning = derive_user_random_number(USER, 1)
        with self.Session() as session:
            calculation = settle_user_prizes(
                session,
                USER,
                [Draw(winning, 42, to_fixed(100))],
                [[1]],
            )
        self.assertEqual(calculation.total, to_fixed(80))
        self.assertEqual(calculation.draws[0].balance, to_fixed(10))

    def test_settle_user_prizes_checks_entitlement(self) -> None:
        with self.Session.begin() as session:
            submit_draw_settings(session, OWNER, SETTINGS)
            record_balance_checkpoint(session, USER, 40, to_fixed("1.5"))

        with self.Session() as session:
            with self.assertRaises(InsufficientPicksError):
                settle_user_prizes(
                    session,
                    USER,
                    [Draw(1, 42, to_fixed(100))],
                    [[1, 2]],
                )

    def test_custom_balance_provider(self) -> None:
        with self.Session.begin() as session:
            submit_draw_settings(session, OWNER, SETTINGS)

        winning = derive_user_random_number(USER, 4)
        with self.Session() as session:
            calculation = settle_user_prizes(
                session,
                USER,
                [Draw(winning, 42, to_fixed(10))],
                [[4]],
                balance_provider=StaticBalanceProvider({(USER, 42): to_fixed(1)}),
            )
        self.assertEqual(calculation.total, to_fixed(8))

    def test_submit_draw_settings_requires_owner(self) -> None:
        with self.Session.begin() as session:
            with self.assertRaises(AuthorizationError):
                submit_draw_settings(session, USER, SETTINGS)

    def test_recorded_owner_outlives_configuration_change(self) -> None:
        with self.Session.begin() as session:
            submit_draw_settings(session, OWNER, SETTINGS)

        with patch.dict(os.environ, {"DRAWCALC_OWNER": USER}):
            with self.Session.begin() as session:
                with self.assertRaises(AuthorizationError):
                    submit_draw_settings(session, USER, SETTINGS)
                version = submit_draw_settings(session, OWNER, SETTINGS)
                self.assertEqual(version, 2)

    def test_submit_without_configured_owner_is_rejected(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.Session.begin() as session:
                with self.assertRaises(AuthorizationError):
                    submit_draw_settings(session, OWNER, SETTINGS)


if __name__ == "__main__":
    unittest.main()
