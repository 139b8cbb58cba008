from .step_10_provision_env import ProvisionEnvStep
from .step_20_fetch_repo import FetchRepoStep
from .step_30_fetch_asset import FetchAssetStep
from .step_40_install_deps import InstallDepsStep
from .step_50_build_native_modules import BuildNativeModulesStep
from .step_60_launch_app import LaunchAppStep

__all__ = [
    "ProvisionEnvStep",
    "FetchRepoStep",
    "FetchAssetStep",
    "InstallDepsStep",
    "BuildNativeModulesStep",
    "LaunchAppStep",
]
