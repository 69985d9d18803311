class ExportError(RuntimeError):
    """Base class for failures that stop an export."""


class EntryDocumentMissingError(ExportError):
    pass


class AssetReadError(ExportError):
    """A report file could not be read."""


class AssetDecodeError(AssetReadError):
    pass


class OutputWriteError(ExportError):
    pass
