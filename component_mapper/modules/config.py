import configparser
import os

DEFAULT_LOCATIONS = [
    "/etc/component-mapper/component-mapper.conf",
    os.path.expanduser("~/.config/component-mapper/component-mapper.conf"),
]

ENV_CONF = "COMPONENT_MAPPER_CONF"


def default_locations():
    env_path = os.environ.get(ENV_CONF)
    if env_path:
        return [env_path] + DEFAULT_LOCATIONS
    return list(DEFAULT_LOCATIONS)


class ComponentConfig:
    def __init__(self, locations=None):
        self.locations = locations or default_locations()
        self.config = configparser.ConfigParser()
        self.loaded_from = None
        self.reload()

    def reload(self):
        """(Re)load settings from the first file found; defaults apply when none exists."""
        self.config = configparser.ConfigParser()
        self.loaded_from = None
        for path in self.locations:
            if os.path.isfile(path):
                self.config.read(path)
                self.loaded_from = path
                return

    def get(self, section, option, fallback=None):
        try:
            return self.config.get(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return fallback

    def getboolean(self, section, option, fallback=False):
        try:
            return self.config.getboolean(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return fallback

    def getint(self, section, option, fallback=0):
        try:
            return self.config.getint(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return fallback


# Shared instance used by the other modules
config = ComponentConfig()
