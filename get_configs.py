"""docstring: stores the Config Loader, used to retrieve python config files """
import warnings
import os
from importlib import util

CONFIG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config_files")


def get_config(config: str, variant: str = None):
    """reads in config module from python config file.
        args:
            config: name of the config, e.g. "geonature" for config_files/geonature_config.py
            variant: optional suffix, e.g. "unittest" for config_files/geonature_config.unittest.py
    """
    config = config.lower()

    if variant is not None:
        location = os.path.join(CONFIG_DIR, f"{config}_config.{variant}.py")
    else:
        location = os.path.join(CONFIG_DIR, f"{config}_config.py")

        if not os.path.exists(location):
            template = os.path.join(CONFIG_DIR, f"{config}_config.template.py")
            warnings.warn(f"config file {location} missing, using template defaults from {template}")
            location = template

    try:
        spec = util.spec_from_file_location(name=f"{config}_config",
                                            location=location)
        module = util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
    except FileNotFoundError:
        warnings.warn(f"File for config {config} is missing. "
                      f"Please check that the configuration file is present")
        return None
