import os.path
import json

from .errors import ConfigError

def user_config_file():
    return os.path.join(os.path.expanduser("~"), ".figwrap")

def load_json_object(file_name):
    """ reads a JSON file that has to hold an object """
    values = {}
    try:
        with open(file_name, "r", encoding="utf-8") as f:
            values = json.load(f)
    except ValueError as err:
        raise ConfigError("Config file is not valid JSON: " + str(err), file_name)

    if not isinstance(values, dict):
        raise ConfigError("Config file must hold a JSON object", file_name)
    return values

def read_user_config():
    """ per-user defaults from ~/.figwrap, empty when the file does not exist """
    user_config_file_name = user_config_file()

    if not os.path.exists(user_config_file_name):
        return {}
    return load_json_object(user_config_file_name)
