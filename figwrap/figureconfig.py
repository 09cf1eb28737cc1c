import os.path
import logging

from . import userconfig
from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "figwrap.json"

# camelCase spellings used by the rehype plugin options
ALIASES = {"figureClassName": "figure_class_name",
           "imageClassName": "image_class_name",
           "captionClassName": "caption_class_name",
           "allowEmptyCaption": "allow_empty_caption"}


class FigureConfig:
    """ Options for the figure transform.

        figure_class_name, image_class_name, caption_class_name
            class token added to the <figure>, <img> and <figcaption>
            elements. None (or anything that is not a non-empty string)
            means no class is added.
        allow_empty_caption
            wrap images that have no alt text. They get a <figure> with
            no <figcaption>. Only the value True enables it.
    """

    def __init__(self, figure_class_name=None, image_class_name=None,
                 caption_class_name=None, allow_empty_caption=False):
        self.figure_class_name = figure_class_name
        self.image_class_name = image_class_name
        self.caption_class_name = caption_class_name
        self.allow_empty_caption = allow_empty_caption

    @classmethod
    def from_dict(cls, values, file_name=""):
        """ builds a config from a plain dict, unknown keys are ignored """
        config = cls()
        config.update(values, file_name)
        return config

    def update(self, values, file_name=""):
        for key, value in values.items():
            name = ALIASES.get(key, key)
            if name not in self.to_dict():
                logger.warning("Ignoring unknown option %r in %s", key, file_name or "config")
                continue
            setattr(self, name, value)
        return self

    def to_dict(self):
        return {"figure_class_name": self.figure_class_name,
                "image_class_name": self.image_class_name,
                "caption_class_name": self.caption_class_name,
                "allow_empty_caption": self.allow_empty_caption}

    def __repr__(self):
        return "FigureConfig(" + ", ".join(k + "=" + repr(v) for k, v in self.to_dict().items()) + ")"


def read_config_file(config_file_name):
    """ reads a JSON config file into a dict """
    if not os.path.exists(config_file_name):
        raise ConfigError("No config file exists : " + config_file_name, config_file_name)

    return userconfig.load_json_object(config_file_name)


def load_config(config_file_name=None, site_dir=".", overrides=None):
    """ user defaults, then the project config file, then overrides.

        When config_file_name is None the figwrap.json in site_dir is used
        if there is one. An explicit config_file_name has to exist. """
    config = FigureConfig()
    config.update(userconfig.read_user_config(), userconfig.user_config_file())

    if config_file_name is None:
        candidate = os.path.join(site_dir, CONFIG_FILE_NAME)
        if os.path.exists(candidate):
            config_file_name = candidate

    if config_file_name is not None:
        config.update(read_config_file(config_file_name), config_file_name)

    if overrides:
        config.update({k: v for k, v in overrides.items() if v is not None})

    return config
