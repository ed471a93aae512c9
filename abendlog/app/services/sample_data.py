"""Sample abend logs the store and archive start with when SEED_SAMPLE_LOGS is on."""
from datetime import datetime
from typing import List

from abendlog.app.schemas.logs import LogEntry

SAMPLE_LOGS = [
    {
        "id": "1",
        "subsystem": "CI",
        "composite": "PROD",
        "program": "CUSTMGR",
        "abendCode": "ASRA",
        "jobname": "BATCH01",
        "logNumber": "0001",
        "category": "Program",
        "timestamp": datetime(2024, 12, 15, 14, 30),
        "description": "Customer data retrieval system experienced program protection exception during peak hours",
        "problem": "Program protection exception occurred during customer data retrieval.",
        "resolution": "Fixed array bounds checking in customer lookup routine.",
        "recovery": "Restarted CICS region after applying fix.",
        "results": "Customer transactions processing normally.",
        "prevention": "Added automated testing for array bounds in CI pipeline.",
        "createdBy": "John Doe",
    },
    {
        "id": "2",
        "subsystem": "IM",
        "composite": "TEST",
        "program": "PAYROLL",
        "abendCode": "U0100",
        "jobname": "PAYROLL1",
        "logNumber": "0002",
        "category": "User",
        "timestamp": datetime(2024, 12, 14, 9, 15),
        "description": "Payroll processing failure due to invalid employee ID format in test environment",
        "problem": "Invalid employee ID format causing processing failure.",
        "resolution": "Updated validation routine to handle new ID format.",
        "recovery": "Reprocessed failed transactions.",
        "results": "All payroll transactions completed successfully.",
        "prevention": "Enhanced input validation and error messaging.",
        "createdBy": "Jane Smith",
    },
    {
        "id": "3",
        "subsystem": "DB",
        "composite": "PROD",
        "program": "INVMGMT",
        "abendCode": "SQL904",
        "jobname": "INVBATCH",
        "logNumber": "0003",
        "category": "System",
        "timestamp": datetime(2024, 12, 13, 16, 45),
        "description": "Database tablespace unavailable causing inventory management batch job failure",
        "problem": "Unsuccessful resource allocation - tablespace unavailable.",
        "resolution": "Freed up tablespace by archiving old inventory records.",
        "recovery": "Restarted DB2 subsystem and reran batch job.",
        "results": "Inventory management batch completed successfully.",
        "prevention": "Implemented automated tablespace monitoring.",
        "createdBy": "Mike Johnson",
    },
]


def sample_log_entries() -> List[LogEntry]:
    """Newest first, like the store."""
    return [LogEntry.model_validate(log) for log in SAMPLE_LOGS]
