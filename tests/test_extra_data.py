from __future__ import annotations

import unittest

from exposure_engine.exposure.extra_data import (
    NEW_ID_KEY,
    data_as_text,
    extra_data_from_user_ctx,
    int_list_join,
    marshal_expanded_data,
)
from exposure_engine.models.experiment import UserContext


class MarshalExpandedDataTestCase(unittest.TestCase):
    def test_sorted_pairs_with_alias(self) -> None:
        ctx = UserContext(unit_id="u1", new_unit_id="u2", expanded_data={"b": "2", "a": "1"})
        self.assertEqual(marshal_expanded_data(ctx), "a=1;b=2;new_id=u2")

    def test_repeated_calls_are_identical(self) -> None:
        ctx = UserContext(unit_id="u1", new_unit_id="u2", expanded_data={"z": "9", "m": "5", "a": "0"})
        results = {marshal_expanded_data(ctx) for _ in range(20)}
        self.assertEqual(results, {"a=0;m=5;new_id=u2;z=9"})

    def test_empty_input_yields_empty_string(self) -> None:
        self.assertEqual(marshal_expanded_data(UserContext(unit_id="u1")), "")

    def test_alias_only(self) -> None:
        self.assertEqual(marshal_expanded_data(UserContext(unit_id="u1", new_unit_id="u2")), "new_id=u2")

    def test_real_new_id_key_overwrites_alias(self) -> None:
        ctx = UserContext(unit_id="u1", new_unit_id="alias", expanded_data={NEW_ID_KEY: "real", "a": "1"})
        self.assertEqual(marshal_expanded_data(ctx), "a=1;new_id=real")
        self.assertEqual(extra_data_from_user_ctx(ctx), {"new_id": "real", "a": "1"})

    def test_separators_are_not_escaped(self) -> None:
        ctx = UserContext(unit_id="u1", expanded_data={"k": "v=1;x"})
        self.assertEqual(marshal_expanded_data(ctx), "k=v=1;x")


class ExtraDataMappingTestCase(unittest.TestCase):
    def test_none_when_nothing_to_report(self) -> None:
        self.assertIsNone(extra_data_from_user_ctx(UserContext(unit_id="u1")))

    def test_alias_injected(self) -> None:
        ctx = UserContext(unit_id="u1", new_unit_id="u2", expanded_data={"a": "1"})
        self.assertEqual(extra_data_from_user_ctx(ctx), {"new_id": "u2", "a": "1"})

    def test_does_not_mutate_user_context(self) -> None:
        data = {"a": "1"}
        ctx = UserContext(unit_id="u1", new_unit_id="u2", expanded_data=data)
        extra_data_from_user_ctx(ctx)
        self.assertEqual(data, {"a": "1"})


class IntListJoinTestCase(unittest.TestCase):
    def test_join(self) -> None:
        self.assertEqual(int_list_join([5, 6, 70], "#"), "5#6#70")
        self.assertEqual(int_list_join([], "#"), "")
        self.assertEqual(int_list_join([1], ";"), "1")


class DataAsTextTestCase(unittest.TestCase):
    def test_utf8(self) -> None:
        self.assertEqual(data_as_text("红色".encode("utf-8")), "红色")
        self.assertEqual(data_as_text(b""), "")

    def test_invalid_bytes_replaced(self) -> None:
        self.assertEqual(data_as_text(b"a\xffb"), "a\ufffdb")


if __name__ == "__main__":
    unittest.main()
