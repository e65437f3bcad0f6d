from .settings import GlobalSettings
from .variables import Variable, VariableKind, VariableRegistry
from .domain import Domain
from .view import View, curve_points
from .device import TorchDevice, get_torch_devices
