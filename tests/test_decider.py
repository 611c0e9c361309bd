"""
Tests for core/decider.py

Wiring of actions and sensors around a shared factor mapping.
"""

import threading

import pytest

from deciders.core.action import Action
from deciders.core.decider import Decider, DeciderConfig
from deciders.core.sensor import Sensor, SensorConfig


def bump(decider, amount=1.0):
    decider.factors["x"] = decider.factors.get("x", 0.0) + amount


class TestDecider:
    """Tests for Decider registration and behavior."""

    def test_decider_creation(self):
        decider = Decider()
        assert decider.name == "decider"
        assert decider.factors == {}
        assert decider.actions == {}
        assert decider.sensors == {}

    def test_custom_config(self):
        decider = Decider(DeciderConfig(name="plant"))
        assert decider.name == "plant"

    def test_add_action(self):
        decider = Decider()
        action = Action("bump", bump)
        assert decider.add_action(action)
        assert decider.actions["bump"] is action

    def test_first_registration_wins(self):
        decider = Decider()
        first = Action("bump", bump)
        second = Action("bump", bump)
        decider.add_action(first)
        assert not decider.add_action(second)
        assert decider.actions["bump"] is first

    def test_invoke_uses_decider_factors(self):
        decider = Decider()
        action = Action("bump", bump)
        decider.add_action(action)

        index = decider.invoke("bump", amount=2.0)

        assert index == 0
        assert decider.factors["x"] == 2.0
        assert action.instances[0].before == {}
        assert action.instances[0].after == {"x": 2.0}

    def test_invoke_unknown_action(self):
        with pytest.raises(KeyError):
            Decider().invoke("fly")

    def test_read_sensors_merges(self):
        decider = Decider()
        decider.factors["kept"] = 1.0
        decider.add_sensor(Sensor(SensorConfig(label="s", spectra=["y"], world={"y": 3.0})))

        factors = decider.read_sensors()

        assert factors is decider.factors
        assert decider.factors == {"kept": 1.0, "y": 3.0}

    def test_later_sensor_wins(self):
        decider = Decider()
        decider.add_sensor(Sensor(SensorConfig(label="a", spectra=["x"], world={"x": 1.0})))
        decider.add_sensor(Sensor(SensorConfig(label="b", spectra=["x"], world={"x": 2.0})))
        decider.read_sensors()
        assert decider.factors["x"] == 2.0

    def test_sensor_replaced_by_label(self):
        decider = Decider()
        decider.add_sensor(Sensor(SensorConfig(label="a", spectra=["x"], world={"x": 1.0})))
        decider.add_sensor(Sensor(SensorConfig(label="b", spectra=["x"], world={"x": 2.0})))
        decider.add_sensor(Sensor(SensorConfig(label="a", spectra=["x"], world={"x": 3.0})))
        assert list(decider.sensors) == ["a", "b"]
        decider.read_sensors()
        assert decider.factors["x"] == 2.0

    def test_consider_reads_sensors(self):
        decider = Decider()
        decider.add_sensor(Sensor(SensorConfig(label="s", spectra=["y"], world={"y": 5.0})))
        decider.consider(bias={"y": 1})
        assert decider.factors["y"] == 5.0

    def test_sensor_reading_recorded_by_action(self):
        world = {"light": 1.0}
        decider = Decider()
        decider.add_sensor(Sensor(SensorConfig(label="eye", spectra=["light"], world=world)))
        decider.add_action(Action("bump", bump))

        decider.read_sensors()
        decider.invoke("bump")
        world["light"] = 0.0
        decider.read_sensors()
        decider.invoke("bump")

        instances = decider.actions["bump"].instances
        assert [i.before["light"] for i in instances] == [1.0, 0.0]

    def test_threaded_invocations_all_recorded(self):
        decider = Decider()
        decider.add_action(Action("bump", bump))

        def worker():
            for _ in range(100):
                decider.invoke("bump")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        instances = decider.actions["bump"].instances
        assert len(instances) == 400
        assert decider.factors["x"] == 400.0
        assert all(i.after["x"] - i.before["x"] == 1.0 for i in instances)
