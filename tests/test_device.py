"""Tests for torch device selection."""

import torch

from complexgraph.properties import TorchDevice, get_torch_devices


class TestDevice:
    def test_cpu_always_listed(self):
        assert get_torch_devices()[0][0] == "cpu"

    def test_cpu(self):
        assert TorchDevice("cpu").get_device() == torch.device("cpu")

    def test_unknown_device_falls_back_to_cpu(self):
        assert TorchDevice("cuda:999").get_device() == torch.device("cpu")
        assert TorchDevice("not-a-device").get_device() == torch.device("cpu")
