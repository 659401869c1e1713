"""Docstring: This is a utility file, outlining various useful functions to be used
   for csv import and extraction related tasks.
"""
import json
import os
import numpy as np
import pandas as pd
import regex as re


def unique_ordered_list(input_list):
    """unique_ordered_list:
            takes a list and selects only unique elements,
            while preserving order
        args:
            input_list: list which will be made to have
                        only unique elements.
    """
    unique_elements = []
    seen = set()
    for element in input_list:
        if element not in seen:
            seen.add(element)
            unique_elements.append(element)
    return unique_elements


def is_missing(value):
    """returns True if a value is NA, NaN, None or an empty string"""
    if value is None:
        return True
    if isinstance(value, float) and np.isnan(value):
        return True
    if isinstance(value, str):
        return value == ''
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def get_newest_file(directory: str, pattern: str):
    """get_newest_file: lists every file in a directory whose name matches pattern,
                        and returns the full path of the most recently modified one.
                        Useful when several exports of the same table were downloaded
                        to the same folder.
        args:
            directory: the directory in which to search for files.
            pattern: regular expression searched for anywhere in the file name.
        returns:
            the path of the newest matching file, or None if no file matches.
    """
    if not os.path.isdir(directory):
        raise FileNotFoundError(f"directory {directory} does not exist")

    name_pattern = re.compile(pattern)

    candidates = [os.path.join(directory, f) for f in os.listdir(directory)
                  if name_pattern.search(f) and os.path.isfile(os.path.join(directory, f))]

    if not candidates:
        return None

    return max(candidates, key=os.path.getmtime)


def read_json_asset(path: str):
    """read_json_asset: reads in a json data file, used for static tables
                       kept outside of the code.
        args:
            path: path to the json file
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
