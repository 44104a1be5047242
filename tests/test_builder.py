from __future__ import annotations

import unittest

from exposure_engine.exposure.builder import ExposureBuilder
from exposure_engine.models.experiment import Group, UserContext
from exposure_engine.models.remote_config import ConfigResult, FeatureFlag, RemoteConfig
from exposure_engine.schemas.exposure_schema import ExposureType
from tests.fakes import FIXED_NOW, FixedEnvironment


class ExperimentRecordTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.builder = ExposureBuilder(FixedEnvironment())

    def test_fields(self) -> None:
        ctx = UserContext(unit_id="u1", new_unit_id="u2", decision_id="d1", expanded_data={"a": "1"})
        group = Group(id=42, layer_key="layerA", experiment_key="expA", unit_id_type=3, scene_id_list=[1])

        exposure = self.builder.build_experiment("p1", group, ctx, ExposureType.EXPOSURE_TYPE_MANUAL, 1700)

        self.assertEqual(exposure.unit_id, "u1")
        self.assertEqual(exposure.group_id, 42)
        self.assertEqual(exposure.project_id, "p1")
        self.assertEqual(exposure.time, 1700)
        self.assertEqual(exposure.layer_key, "layerA")
        self.assertEqual(exposure.exp_key, "expA")
        self.assertEqual(exposure.unit_type, "3")
        self.assertEqual(exposure.cluster_id, "d1")
        self.assertEqual(exposure.sdk_type, "python")
        self.assertEqual(exposure.sdk_version, "9.9.9")
        self.assertEqual(exposure.exposure_type, ExposureType.EXPOSURE_TYPE_MANUAL)
        self.assertEqual(exposure.extra_data, {"new_id": "u2", "a": "1"})

    def test_upload_time_from_environment(self) -> None:
        self.assertEqual(self.builder.upload_time(), int(FIXED_NOW.timestamp()))

    def test_wire_aliases(self) -> None:
        exposure = self.builder.build_experiment(
            "p1", Group(id=1), UserContext(unit_id="u1"), ExposureType.EXPOSURE_TYPE_MANUAL, 1
        )
        dumped = exposure.model_dump(by_alias=True)
        self.assertEqual(
            list(dumped),
            [
                "unitId", "groupId", "projectId", "time", "layerKey", "expKey", "unitType",
                "clusterId", "sdkType", "sdkVersion", "exposureType", "extraData",
            ],
        )
        self.assertIsNone(dumped["extraData"])


class RemoteConfigRowTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.builder = ExposureBuilder(FixedEnvironment())
        self.config = ConfigResult(
            key="color",
            data=b'{"v":"red"}',
            unit_id_type=2,
            user_ctx=UserContext(unit_id="u1", new_unit_id="u2", expanded_data={"b": "2", "a": "1"}),
            remote_config=RemoteConfig(scene_id_list=[6, 5]),
        )

    def test_row_layout(self) -> None:
        row = self.builder.build_remote_config_row("p1", self.config, ExposureType.EXPOSURE_TYPE_MANUAL)
        self.assertEqual(
            row,
            [
                "u1",
                "p1",
                "color",
                "9.9.9",
                '{"v":"red"}',
                "2024-05-06 07:08:09",
                "test",
                "2",
                "6#5",
                "EXPOSURE_TYPE_MANUAL",
                "a=1;b=2;new_id=u2",
            ],
        )

    def test_feature_flag_delegates_to_config(self) -> None:
        flag_row = self.builder.build_feature_flag_row(
            "p1", FeatureFlag(config_result=self.config), ExposureType.EXPOSURE_TYPE_MANUAL
        )
        config_row = self.builder.build_remote_config_row("p1", self.config, ExposureType.EXPOSURE_TYPE_MANUAL)
        self.assertEqual(flag_row, config_row)

    def test_empty_scene_list_and_extra_data(self) -> None:
        config = ConfigResult(key="k", user_ctx=UserContext(unit_id="u1"))
        row = self.builder.build_remote_config_row("p1", config, ExposureType.EXPOSURE_TYPE_AUTOMATIC)
        self.assertEqual(len(row), 11)
        self.assertEqual(row[4], "")
        self.assertEqual(row[8], "")
        self.assertEqual(row[9], "EXPOSURE_TYPE_AUTOMATIC")
        self.assertEqual(row[10], "")


if __name__ == "__main__":
    unittest.main()
