"""
Table schema used when the origin table has to be created.
"""

import copy
from typing import Any, Dict, List

# Global tables need a stream with both images
DEFAULT_TABLE_SCHEMA: Dict[str, Any] = {
    'AttributeDefinitions': [
        {'AttributeName': 'key', 'AttributeType': 'S'}
    ],
    'KeySchema': [
        {'AttributeName': 'key', 'KeyType': 'HASH'}
    ],
    'BillingMode': 'PAY_PER_REQUEST',
    'TableName': 'config',
    'StreamSpecification': {
        'StreamEnabled': True,
        'StreamViewType': 'NEW_AND_OLD_IMAGES'
    },
    'Tags': []
}


def build_table_schema(template: Dict[str, Any], table_name: str, tags: List[Dict[str, str]]) -> Dict[str, Any]:
    """
    Prepare create_table arguments for one invocation.

    The template is deep-copied so the module-level default survives warm
    Lambda starts untouched.
    """
    schema = copy.deepcopy(template)
    schema['TableName'] = table_name
    schema['Tags'] = list(tags)
    # create_table rejects an empty Tags list
    if not schema['Tags']:
        del schema['Tags']
    return schema
