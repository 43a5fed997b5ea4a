"""
Validate mappings against the schemas in assets/config
"""
import os
import logging

from cerberus import Validator

from lenareader.util import load_yaml_asset

logger = logging.getLogger(__name__)


def load_schema(name):
    """Load a cerberus schema from assets/config/{name}.yaml
    """
    return load_yaml_asset(os.path.join('config', '{}.yaml'.format(name)))


def validate(mapping, schema, silent=False):
    """
    Validate values in the input dictionary using a reference schema

    Parameters
    ----------
    mapping: dict
        Mapping to validate

    schema: str or dict
        Schema name (file in assets/config/ without extension) or cerberus
        schema

    silent: bool, optional
        If True, do not raise an exception when validation fails

    Returns
    -------
    dict
        Validated mapping, with default values filled in

    Raises
    ------
    ValueError
        If the mapping does not conform to the schema and silent is False
    """
    if isinstance(schema, str):
        schema = load_schema(schema)

    validator = Validator(schema)
    is_valid = validator.validate(mapping)

    if not is_valid:
        if not silent:
            raise ValueError('Errors occurred while validating: {}'
                             .format(validator.errors))

        logger.warning('Errors occurred while validating: %s',
                       validator.errors)
        return dict(mapping)

    return validator.document
