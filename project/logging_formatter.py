import json
import logging


class JsonLogFormatter(logging.Formatter):
    def format(self, record):
        return json.dumps({
            'severity': record.levelname,
            'logger': record.name,
            'time': self.formatTime(record),
            'message': super().format(record),
        })
