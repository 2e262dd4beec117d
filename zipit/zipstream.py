#
# ZIP File streaming
# based on official ZIP File Format Specification version 6.3.4
# https://pkware.cachefly.net/webdocs/casestudies/APPNOTE.TXT
#
import contextlib
import logging
import os
import zlib
from collections import namedtuple

from . import consts, records
from .dostime import FileDateTime, to_dos_fields
from .errors import ArchiveFinalizedError, SourceError


__all__ = ("Archive", "ZipStream", "MemberRecord")

__log__ = logging.getLogger(__name__)


# bookkeeping of a single archived file, needed by the central directory
MemberRecord = namedtuple("MemberRecord",
                          ("name", "size", "crc", "offset", "date", "time"))


class Processor:
    """
    Running crc and size of a stored file payload
    """

    def __init__(self):
        self.crc = 0
        self.size = 0

    def process(self, chunk):
        self.size += len(chunk)
        self.crc = zlib.crc32(chunk, self.crc)
        return chunk

    def state(self):
        return self.crc & consts.UINT32_MAX, self.size


class ZipBase:

    def __init__(self, chunksize=consts.DEFAULT_CHUNKSIZE):
        """
        chunksize - maximal size of data block read from sources
        """
        self.chunksize = chunksize
        self.__members = []
        self.__offset = 0
        self.__final = False

    @property
    def members(self):
        return tuple(self.__members)

    @property
    def written(self):
        return self.__offset

    @property
    def finalized(self):
        return self.__final

    def _check_not_final(self):
        if self.__final:
            raise ArchiveFinalizedError("Archive has already been finalized")

    def _offset_add(self, value):
        self.__offset += value

    def _account_write(self, data, accepted):
        """
        Count bytes taken by the sink and return the part still to write.
        None means the whole block was taken, as buffered files and
        most sink objects return.
        """
        if accepted is None:
            accepted = len(data)
        elif accepted <= 0:
            raise OSError("Sink accepted no data")
        self._offset_add(accepted)
        return memoryview(data)[accepted:]

    # member encoding

    def _begin_member(self, name, datetime):
        """
        Return pending member record and its local file header
        """
        fname = records.encode_name(name)
        if len(fname) > consts.UINT16_MAX:
            __log__.warning("File name of %d bytes does not fit in zip header,"
                            " archive will be malformed", len(fname))
        offset = self.written
        if offset > consts.UINT32_MAX:
            __log__.warning("Offset %d of %r exceeds 4 GiB, zip64 is not"
                            " supported", offset, fname)
        dosdate, dostime = to_dos_fields(datetime)
        member = MemberRecord(fname, 0, 0, offset, dosdate, dostime)
        return member, records.local_file_header(fname, dosdate, dostime)

    def _end_member(self, member, processor):
        """
        Return completed member record and its data descriptor
        """
        crc, size = processor.state()
        if size > consts.UINT32_MAX:
            __log__.warning("Size of %r exceeds 4 GiB, zip64 is not supported",
                            member.name)
        member = member._replace(crc=crc, size=size)
        return member, records.data_descriptor(crc, size)

    def _add_member(self, member):
        self.__members.append(member)
        __log__.debug("Added %r (%d bytes, crc %08x) at offset %d",
                      member.name, member.size, member.crc, member.offset)

    def _read_chunks(self, source):
        if not hasattr(source, 'read'):
            # iterable of data chunks
            for part in source:
                if part:
                    yield part
            return
        while True:
            part = source.read(self.chunksize)
            if not part:
                break
            yield part

    def _stream_member(self, name, datetime, source):
        """
        Stream single file with header and descriptor at the end.
        The member is registered only after its descriptor was consumed.
        """
        member, header = self._begin_member(name, datetime)
        yield header
        pcs = Processor()
        for chunk in self._read_chunks(source):
            yield pcs.process(chunk)
        member, descriptor = self._end_member(member, pcs)
        yield descriptor
        self._add_member(member)

    def _make_end_structures(self):
        """
        cdir and cdend structures are saved at the end of zip file
        """
        self._check_not_final()
        self.__final = True
        cdir_offset = self.written
        cdir_size = 0
        if len(self.__members) > consts.UINT16_MAX:
            __log__.warning("%d files exceed zip entry count limit",
                            len(self.__members))
        if cdir_offset > consts.UINT32_MAX:
            __log__.warning("Central directory offset %d exceeds 4 GiB,"
                            " zip64 is not supported", cdir_offset)
        # stream central directory entries
        for member in self.__members:
            chunk = records.central_directory_entry(
                member.name, member.crc, member.size,
                member.date, member.time, member.offset)
            cdir_size += len(chunk)
            yield chunk
        # stream end of central directory
        yield records.end_of_central_directory(
            len(self.__members), cdir_size, cdir_offset)
        __log__.debug("Finalized archive with %d files, central directory"
                      " of %d bytes at offset %d",
                      len(self.__members), cdir_size, cdir_offset)


class Archive(ZipBase):
    """
    Zip archive written on the fly into a sink.

    sink - any object with write(bytes) method, no seeking is done
    """

    def __init__(self, sink, chunksize=consts.DEFAULT_CHUNKSIZE):
        super(Archive, self).__init__(chunksize)
        self._sink = sink

    @property
    def sink(self):
        return self._sink

    def _write(self, chunk):
        # raw files and sockets may take only part of the block
        rest = chunk
        while rest:
            rest = self._account_write(rest, self._sink.write(rest))

    def append(self, name, datetime, source):
        """
        Append a file read from source until it returns empty bytes.
        source may also be an iterable of data chunks.
        Errors of source and sink are passed through, bytes already
        written are not taken back.
        """
        self._check_not_final()
        for chunk in self._stream_member(name, datetime, source):
            self._write(chunk)

    def finalize(self):
        """
        Write central directory and return the sink.
        Archive can not be used after that.
        """
        for chunk in self._make_end_structures():
            self._write(chunk)
        return self._sink


class ZipStream(ZipBase):
    """
    Generator of zip archive chunks, for streamed responses.
    """

    def __init__(self, files=(), chunksize=consts.DEFAULT_CHUNKSIZE):
        """
        files - list of files, or generator returning files
                each file entry should be represented as dict with
                parameters:
                file - full path to file name
                name - (optional) name of file in zip archive
                       if not used, filename stripped from 'file' will be used
                stream - (optional) can be used as replacement for 'file'
                         entry, an object with read(size) method or
                         an iterable of data chunks.
                         If used, then 'name' entry is required.
                datetime - (optional) FileDateTime or datetime.datetime,
                           current time is used by default
                size - (optional) payload size of 'stream', needed by size()
        chunksize - default size of data block streamed from files
        """
        super(ZipStream, self).__init__(chunksize)
        self._source_of_files = files

    def _entry_name(self, data):
        if 'file' in data:
            return data.get('name') or os.path.basename(data['file'])
        if 'stream' in data:
            if 'name' not in data:
                raise SourceError("Streamed entry requires a 'name'")
            return data['name']
        raise SourceError("No file or stream in sources")

    def _prepare_entry(self, data):
        """
        Return name and date of streamed file
        """
        name = self._entry_name(data)
        datetime = data.get('datetime')
        if datetime is None:
            datetime = FileDateTime.now()
        return name, datetime

    def _open_source(self, data):
        if 'file' in data:
            return open(data['file'], "rb")
        return contextlib.nullcontext(data['stream'])

    def _entry_size(self, data):
        if 'size' in data:
            return data['size']
        if 'file' in data:
            return os.path.getsize(data['file'])
        raise SourceError("Size of stream %r is unknown" % data.get('name'))

    def size(self):
        """
        Final size of streamed archive, computed without reading any file
        """
        if not isinstance(self._source_of_files, (list, tuple)):
            raise TypeError("Size of generated files list is unknown")
        return records.archive_size(
            (self._entry_name(data), self._entry_size(data))
            for data in self._source_of_files)

    def stream(self):
        """
        Stream complete archive
        """
        self._check_not_final()
        for source in self._source_of_files:
            name, datetime = self._prepare_entry(source)
            with self._open_source(source) as fh:
                for chunk in self._stream_member(name, datetime, fh):
                    self._offset_add(len(chunk))
                    yield chunk
        for chunk in self._make_end_structures():
            self._offset_add(len(chunk))
            yield chunk
