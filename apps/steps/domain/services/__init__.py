from .recurrence import ExpansionResult, RecurrenceService, LOOKAHEAD_DAYS
