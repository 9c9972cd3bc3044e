from apache_beam.io.filesystems import FileSystems
import logging


def validate_output_paths(paths):
    """Validate that output files exist on local disk or Azure Blob Storage"""
    for path in paths:
        exists = FileSystems.exists(path)
        logging.info(f"Checking {path}: {'exists' if exists else 'does not exist'}")
        if not exists:
            return False
    return True


def record_to_dict(record):
    """Convert a record tuple to a plain dictionary, leaving dictionaries untouched"""
    if isinstance(record, dict):
        return dict(record)
    return record._asdict()


def rejection_to_dict(rejection):
    """Flatten a SalesRejection into one dictionary row for the rejects output"""
    row = {'reason': rejection.reason}
    row.update(rejection.record._asdict())
    row['detail'] = rejection.detail or ''
    return row
