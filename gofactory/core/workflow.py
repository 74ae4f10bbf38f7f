from enum import Enum

class PipelineStage(str, Enum):
    NORMALIZE = "NORMALIZE"
    GENERATE = "GENERATE"
    WRITE = "WRITE"
    FORMAT = "FORMAT"
    VALIDATE = "VALIDATE"
    COMPILE = "COMPILE"
    DONE = "DONE"
    FAILED = "FAILED"
