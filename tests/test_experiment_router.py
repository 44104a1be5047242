from __future__ import annotations

import unittest

from exposure_engine.core.errors import SinkDispatchError
from exposure_engine.exposure.builder import ExposureBuilder
from exposure_engine.exposure.router import SceneFanOutRouter
from exposure_engine.models.experiment import ExperimentList, Group, UserContext
from exposure_engine.schemas.exposure_schema import ExposureType
from tests.fakes import FixedEnvironment, RecordingSink, client_with, metrics_config, scene_map

MANUAL = ExposureType.EXPOSURE_TYPE_MANUAL


def _list(*groups: Group) -> ExperimentList:
    return ExperimentList(
        user_ctx=UserContext(unit_id="u1"),
        data={f"layer{g.id}": g for g in groups},
    )


class SceneFanOutRouterTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.sink = RecordingSink()
        self.router = SceneFanOutRouter(client_with(self.sink), ExposureBuilder(FixedEnvironment()))

    def _route(self, exp_list, scenes=None, default=None, ignore=None) -> None:
        self.router.route("p1", exp_list, MANUAL, scenes or {}, default, ignore or {})

    def test_groups_without_scenes_go_to_default_only(self) -> None:
        self._route(
            _list(Group(id=1), Group(id=2)),
            scenes=scene_map(s10=metrics_config("scene10")),
            default=metrics_config("default"),
        )
        self.assertEqual(self.sink.tables(), ["default"])
        group = self.sink.payload_for("default")
        self.assertEqual([e.group_id for e in group.exposures], [1, 2])

    def test_ignored_groups_never_reported(self) -> None:
        self._route(
            _list(Group(id=1), Group(id=2, scene_id_list=[10]), Group(id=3, scene_id_list=[10])),
            scenes=scene_map(s10=metrics_config("scene10")),
            default=metrics_config("default"),
            ignore={1: True, 2: True, 3: False},
        )
        self.assertEqual(self.sink.tables(), ["scene10"])
        self.assertEqual([e.group_id for e in self.sink.payload_for("scene10").exposures], [3])

    def test_group_fans_out_to_every_scene(self) -> None:
        self._route(
            _list(Group(id=7, scene_id_list=[30, 10, 20])),
            scenes=scene_map(
                s10=metrics_config("scene10"),
                s20=metrics_config("scene20"),
                s30=metrics_config("scene30"),
            ),
        )
        self.assertEqual(self.sink.tables(), ["scene10", "scene20", "scene30"])
        payloads = [
            self.sink.payload_for(t).exposures[0].model_dump_json() for t in ("scene10", "scene20", "scene30")
        ]
        self.assertEqual(len(set(payloads)), 1)

    def test_unconfigured_scene_merges_into_default(self) -> None:
        self._route(
            _list(Group(id=2, scene_id_list=[10, 20])),
            scenes=scene_map(s10=metrics_config("scene10")),
            default=metrics_config("default"),
        )
        self.assertEqual(self.sink.tables(), ["scene10", "default"])
        self.assertEqual(len(self.sink.payload_for("scene10").exposures), 1)
        default_exposures = self.sink.payload_for("default").exposures
        self.assertEqual([e.group_id for e in default_exposures], [2])

    def test_disabled_or_incomplete_scene_is_dropped_not_merged(self) -> None:
        self._route(
            _list(Group(id=1, scene_id_list=[10]), Group(id=2, scene_id_list=[20]), Group(id=3)),
            scenes=scene_map(
                s10=metrics_config("scene10", enabled=False),
                s20=metrics_config("scene20", with_metadata=False),
            ),
            default=metrics_config("default"),
        )
        self.assertEqual(self.sink.tables(), ["default"])
        self.assertEqual([e.group_id for e in self.sink.payload_for("default").exposures], [3])

    def test_no_default_drops_merged_records(self) -> None:
        self._route(_list(Group(id=1), Group(id=2, scene_id_list=[99])), scenes={}, default=None)
        self.assertEqual(self.sink.calls, [])

    def test_disabled_default_drops_bucket(self) -> None:
        self._route(_list(Group(id=1)), default=metrics_config("default", enabled=False))
        self.assertEqual(self.sink.calls, [])

    def test_empty_default_bucket_is_not_sent(self) -> None:
        self._route(
            _list(Group(id=1, scene_id_list=[10])),
            scenes=scene_map(s10=metrics_config("scene10")),
            default=metrics_config("default"),
        )
        self.assertEqual(self.sink.tables(), ["scene10"])

    def test_sampling_interval_comes_from_config(self) -> None:
        self._route(
            _list(Group(id=1, scene_id_list=[10]), Group(id=2)),
            scenes=scene_map(s10=metrics_config("scene10", sampling_interval=7)),
            default=metrics_config("default", sampling_interval=3),
        )
        intervals = {m.table_name: m.sampling_interval for _, m, _ in self.sink.calls}
        self.assertEqual(intervals, {"scene10": 7, "default": 3})

    def test_records_share_one_timestamp(self) -> None:
        self._route(
            _list(Group(id=1), Group(id=2), Group(id=3, scene_id_list=[10])),
            default=metrics_config("default"),
        )
        times = {e.time for e in self.sink.payload_for("default").exposures}
        self.assertEqual(len(times), 1)

    def test_dispatch_error_aborts_remaining_scenes(self) -> None:
        self.sink.fail_tables = {"scene20"}
        with self.assertRaises(SinkDispatchError):
            self._route(
                _list(Group(id=1, scene_id_list=[30, 20, 10]), Group(id=2)),
                scenes=scene_map(
                    s10=metrics_config("scene10"),
                    s20=metrics_config("scene20"),
                    s30=metrics_config("scene30"),
                ),
                default=metrics_config("default"),
            )
        # 升序发送：10 成功，20 失败，30 和默认不再发送
        self.assertEqual(self.sink.tables(), ["scene10", "scene20"])

    def test_split_buckets(self) -> None:
        buckets = self.router.split(
            "p1",
            _list(Group(id=1), Group(id=2, scene_id_list=[10, 20]), Group(id=3, scene_id_list=[20])),
            MANUAL,
            {},
        )
        self.assertEqual([e.group_id for e in buckets.default.exposures], [1])
        self.assertEqual(sorted(buckets.scenes), [10, 20])
        self.assertEqual([e.group_id for e in buckets.scenes[20].exposures], [2, 3])


if __name__ == "__main__":
    unittest.main()
