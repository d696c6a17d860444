"""Config file discovery and merging with command line arguments"""
import getpass
import logging
import os

import yaml

from .errors import ConfigError

log = logging.getLogger(__name__)

CONFIG_ENV = 'VSPHERE_HELPER_CONFIG'

DEFAULTS = {
    'port': 443,
    'insecure': True,
    'debug': False,
}

REQUIRED = ('server', 'username')


def default_config_dir():
    return os.path.join(os.path.expanduser("~"), ".config", "vsphere_helper")


def find_config_name():
    """
    Path of the config file to read, or None when there is none.
    The environment variable wins and must point at an existing file.
    """
    if CONFIG_ENV in os.environ:
        config_file = os.environ[CONFIG_ENV]
        if not os.path.isfile(config_file):
            raise ConfigError(
                "%s does not exist. Set the %s environment variable to "
                "your config file's path." % (config_file, CONFIG_ENV))
        return config_file

    config_file = os.path.join(default_config_dir(), "config.yml")
    if os.path.isfile(config_file):
        return config_file
    return None


def gen_default_example_config_name():
    module_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(module_dir, "config", "config.yml.example")


def load_config_file(path):
    try:
        with open(path) as fh:
            config = yaml.safe_load(fh)
    except IOError as e:
        raise ConfigError("Unable to open config file %s: %s" % (path, e))
    except yaml.YAMLError as e:
        raise ConfigError(
            "Unable to read config file %s. YAML syntax issue, perhaps? %s"
            % (path, e))

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError("Config file %s must hold a mapping" % path)
    return config


def get_configs(kwargs, config_file=None):
    """
    Merge defaults, the config file and command line arguments.
    Command line values that are not None override the file.
    """
    config = dict(DEFAULTS)

    if config_file is None:
        config_file = find_config_name()
    if config_file:
        log.debug("Reading config from %s", config_file)
        config.update(load_config_file(config_file))

    for key, value in kwargs.items():
        if value is not None:
            config[key] = value

    notset = [key for key in REQUIRED if not config.get(key)]
    if notset:
        raise ConfigError("Required parameters not set: %s" % notset)

    if config.get('networks') is None:
        config['networks'] = {}

    return config


def ensure_password(config, prompt=None):
    """Ask for the password, masked, when neither flag nor file set it"""
    if not config.get('password'):
        prompt = prompt or getpass.getpass
        config['password'] = prompt(
            "Password for user '%s': " % config['username'])
    return config
