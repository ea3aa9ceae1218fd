import codecs
import json
import os
import sys
from gi.repository import GLib
import logging

import orjson

import input_method

logger = logging.getLogger(__name__)


# ─── Paths ─────────────────────────────────────────────────────────────

def get_package_name():
    '''
    returns 'vi-ime'
    '''
    return 'vi-ime'


def get_datadir():
    '''
    Return the path to the data directory under user-independent (central)
    location (= not under the HOME). The source checkout's data/ directory is
    used when running from the repository.
    '''
    source_datadir = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'data')
    if os.path.exists(os.path.join(source_datadir, 'config.json')):
        return os.path.normpath(source_datadir)
    return os.path.join(sys.prefix, 'share', get_package_name())


def get_default_config_path():
    '''
    Return the path to the default config file in the system installation.
    This is the config.json that gets copied to user's home on first run.
    '''
    return os.path.join(get_datadir(), 'config.json')


def get_user_config_dir():
    '''
    Return the path to the config directory under $HOME.
    Typically, it would be $HOME/.config/vi-ime
    '''
    return os.path.join(GLib.get_user_config_dir(), get_package_name())


# ─── Config ────────────────────────────────────────────────────────────

# Allowed values for keys whose type alone does not say enough.
CONFIG_CHOICES = {
    'accent_style': ('old', 'new'),
}


def get_config_data():
    '''
    This function is to load the config JSON file from the HOME/.config/vi-ime
    When the file is not present (e.g., after initial installation), it will copy
    the default config.json from the central location.

    Returns:
        tuple: (config_data, warnings_string) where warnings_string is empty if no warnings
    '''
    configfile_path = os.path.join(get_user_config_dir(), 'config.json')
    default_config_path = get_default_config_path()
    default_config = json.load(codecs.open(default_config_path, encoding='utf-8'))
    warnings = ""

    if not os.path.exists(configfile_path):
        warning_msg = f'config.json is not found under {get_user_config_dir()} . Copying the default config.json from {default_config_path} ..'
        logger.warning(warning_msg)
        warnings = warning_msg
        os.makedirs(get_user_config_dir(), exist_ok=True)
        with open(configfile_path, 'w', encoding='utf-8') as f:
            json.dump(default_config, f, ensure_ascii=False)
        return default_config, warnings
    try:
        config_data = json.load(codecs.open(configfile_path, encoding='utf-8'))
    except json.decoder.JSONDecodeError as e:
        logger.error(f'Error loading the config.json under {get_user_config_dir()}')
        logger.error(e)
        logger.error(f'Using (but not copying) the default config.json from {default_config_path} ..')
        return get_default_config_data(), warnings

    for k in default_config:
        if k not in config_data:
            warning_msg = f'The key "{k}" was not found in the config.json under {get_user_config_dir()} . Copying the default key-value'
            logger.warning(warning_msg)
            warnings += ("\n" if warnings else "") + warning_msg
            config_data[k] = default_config[k]
        if type(config_data[k]) != type(default_config[k]):
            warning_msg = f'Type mismatch found for the key "{k}" between config.json under {get_user_config_dir()} and default config.json. Replacing the value of this key with the value in default config.json'
            logger.warning(warning_msg)
            warnings += ("\n" if warnings else "") + warning_msg
            config_data[k] = default_config[k]

    for k, choices in CONFIG_CHOICES.items():
        if str(config_data.get(k)).lower() not in choices:
            warning_msg = f'The value {config_data.get(k)!r} of the key "{k}" is not one of {", ".join(choices)}. Replacing it with the value in default config.json'
            logger.warning(warning_msg)
            warnings += ("\n" if warnings else "") + warning_msg
            config_data[k] = default_config[k]

    return config_data, warnings


def get_default_config_data():
    default_config_path = get_default_config_path()
    if not os.path.exists(default_config_path):
        logger.error(f'config.json is not found under {get_default_config_path()}. Please check that installation was done without problem!')
        return None
    default_config = json.load(codecs.open(default_config_path, encoding='utf-8'))
    return default_config


# ─── Input method definitions ──────────────────────────────────────────

def get_user_methods_dir():
    """
    Return the directory for user-defined input method files.
    Typically ~/.config/vi-ime/methods/
    """
    return os.path.join(get_user_config_dir(), 'methods')


def find_input_method_file(file_name):
    '''
    Look for an input method definition: an existing path is used as is,
    then the user methods directory, then the central data directory.

    Returns:
        The path, or None when the file is nowhere to be found
    '''
    if os.path.exists(file_name):
        return file_name
    for directory in (get_user_methods_dir(), os.path.join(get_datadir(), 'methods')):
        path = os.path.join(directory, file_name)
        if os.path.exists(path):
            return path
    return None


def load_input_method_definition(path):
    """
    Load an input method definition JSON file.

    Returns:
        InputMethodTable, or None when the file cannot be read or is invalid
    """
    try:
        with open(path, 'rb') as f:
            data = orjson.loads(f.read())
    except orjson.JSONDecodeError as e:
        logger.error(f'Failed to parse input method JSON: {path} - {e}')
        return None
    except OSError as e:
        logger.error(f'Failed to load input method: {path} - {e}')
        return None

    try:
        table = input_method.table_from_definition(data)
    except ValueError as e:
        logger.error(f'Invalid input method definition: {path} - {e}')
        return None
    logger.info(f'Loaded input method: {path} ({table.name})')
    return table


def get_input_method_table(config):
    '''
    Return the InputMethodTable selected by config["input_method"].

    "telex" and "vni" are built in; any other value is a definition file
    name. When that file cannot be loaded, TELEX is used.
    '''
    name = config.get('input_method', 'telex')
    try:
        return input_method.get_table(name)
    except ValueError:
        pass
    path = find_input_method_file(name)
    table = load_input_method_definition(path) if path else None
    if table is None:
        logger.error(f'Error in loading input method file: {name} . Falling back to telex')
        return input_method.TELEX
    return table
