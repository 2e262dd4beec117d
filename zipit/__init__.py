from .dostime import FileDateTime
from .errors import ZipitError, ArchiveFinalizedError, SourceError
from .records import archive_size
from .zipstream import Archive, ZipStream, MemberRecord
from .aiozipstream import AioArchive, AioZipStream

version = "0.4.0"
