#
# ZIP File streaming
# based on official ZIP File Format Specification version 6.3.4
# https://pkware.cachefly.net/webdocs/casestudies/APPNOTE.TXT
#
import asyncio
import contextlib
import inspect
from concurrent import futures

import aiofiles

from . import consts
from .zipstream import ZipBase, ZipStream, Processor


__all__ = ("AioArchive", "AioZipStream")


class AioBase:
    """
    Asynchronous reading and crc calculation shared by
    AioArchive and AioZipStream.

    Sources may return bytes or awaitables from read(size), so aiofiles
    handles, asyncio.StreamReader and plain file objects all work.
    Iterables and asynchronous iterables of chunks are read as they are.
    """

    def __get_executor(self):
        # get thread pool executor
        try:
            return self.__tpex
        except AttributeError:
            self.__tpex = futures.ThreadPoolExecutor(max_workers=1)
            return self.__tpex

    def _shutdown_executor(self):
        tpex = self.__dict__.pop('_AioBase__tpex', None)
        if tpex is not None:
            tpex.shutdown(wait=False)

    async def _execute_aio_task(self, task, *args):
        # run synchronous task in separate thread and await for result
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.__get_executor(), task, *args)

    async def _read_chunks(self, source):
        if not hasattr(source, 'read'):
            # iterable or asynchronous iterable of data chunks
            if hasattr(source, '__aiter__'):
                async for part in source:
                    if part:
                        yield part
            else:
                for part in source:
                    if part:
                        yield part
            return
        while True:
            part = source.read(self.chunksize)
            if inspect.isawaitable(part):
                part = await part
            if not part:
                break
            yield part

    async def _stream_member(self, name, datetime, source):
        """
        stream single zip file with header and descriptor at the end
        """
        member, header = self._begin_member(name, datetime)
        yield header
        pcs = Processor()
        async for chunk in self._read_chunks(source):
            yield await self._execute_aio_task(pcs.process, chunk)
        member, descriptor = self._end_member(member, pcs)
        yield descriptor
        self._add_member(member)


class AioArchive(AioBase, ZipBase):
    """
    Asynchronous version of Archive.

    sink - object with write(bytes) method returning an awaitable
           (aiofiles), or a plain write() paired with awaitable
           drain() (asyncio.StreamWriter)
    """

    def __init__(self, sink, chunksize=consts.DEFAULT_CHUNKSIZE):
        super(AioArchive, self).__init__(chunksize)
        self._sink = sink

    @property
    def sink(self):
        return self._sink

    async def _write(self, chunk):
        rest = chunk
        while rest:
            accepted = self._sink.write(rest)
            if inspect.isawaitable(accepted):
                accepted = await accepted
            else:
                drain = getattr(self._sink, 'drain', None)
                if drain is not None:
                    await drain()
            rest = self._account_write(rest, accepted)

    async def append(self, name, datetime, source):
        """
        Append a file read from source until it returns empty bytes.
        Errors of source and sink are passed through.
        """
        self._check_not_final()
        member_stream = self._stream_member(name, datetime, source)
        try:
            async for chunk in member_stream:
                await self._write(chunk)
        except BaseException:
            # failed archives are dropped by callers, do not keep the worker thread
            self._shutdown_executor()
            raise
        finally:
            await member_stream.aclose()

    async def finalize(self):
        """
        Write central directory and return the sink.
        """
        try:
            for chunk in self._make_end_structures():
                await self._write(chunk)
        finally:
            self._shutdown_executor()
        return self._sink


class AioZipStream(AioBase, ZipStream):
    """
    Asynchronous version of ZipStream.
    files may also be an asynchronous generator, 'file' entries
    are read with aiofiles.
    """

    def _open_source(self, data):
        if 'file' in data:
            return aiofiles.open(data['file'], "rb")
        return contextlib.nullcontext(data['stream'])

    async def _iter_files(self):
        files = self._source_of_files
        if hasattr(files, '__aiter__'):
            async for data in files:
                yield data
        else:
            for data in files:
                yield data

    async def stream(self):
        self._check_not_final()
        try:
            # stream files
            async for source in self._iter_files():
                name, datetime = self._prepare_entry(source)
                async with self._open_source(source) as fh:
                    async for chunk in self._stream_member(name, datetime, fh):
                        self._offset_add(len(chunk))
                        yield chunk
            # stream zip structures
            for chunk in self._make_end_structures():
                self._offset_add(len(chunk))
                yield chunk
        finally:
            self._shutdown_executor()
