#
# Binary records of a stored, single disk zip archive
# based on official ZIP File Format Specification version 6.3.4
# https://pkware.cachefly.net/webdocs/casestudies/APPNOTE.TXT
#
from . import consts


__all__ = ("encode_name", "local_file_header", "data_descriptor",
           "central_directory_entry", "end_of_central_directory",
           "archive_size")


def _u16(value):
    return value & consts.UINT16_MAX


def _u32(value):
    return value & consts.UINT32_MAX


def encode_name(name):
    """
    File names are always stored as utf-8
    """
    if isinstance(name, str):
        return name.encode("utf-8")
    return bytes(name)


def local_file_header(fname, mod_date, mod_time):
    """
    Create local file header.
    CRC and sizes are left as zeros, readers take them from
    the data descriptor following the payload.
    """
    fields = {"signature": consts.LF_MAGIC,
              "version": consts.ZIP_VERSION,
              "flags": consts.FLAGS,
              "compression": consts.COMPRESSION_STORE,
              "mod_time": _u16(mod_time),
              "mod_date": _u16(mod_date),
              "crc": 0,
              "comp_size": 0,
              "uncomp_size": 0,
              "fname_len": _u16(len(fname)),
              "extra_len": 0}
    head = consts.LF_TUPLE(**fields)
    return consts.LF_STRUCT.pack(*head) + fname


def data_descriptor(crc, size):
    fields = {"signature": consts.DD_MAGIC,
              "crc": _u32(crc),
              "comp_size": _u32(size),
              "uncomp_size": _u32(size)}
    descriptor = consts.DD_TUPLE(**fields)
    return consts.DD_STRUCT.pack(*descriptor)


def central_directory_entry(fname, crc, size, mod_date, mod_time, offset):
    """
    Create central directory file header
    """
    fields = {"signature": consts.CDFH_MAGIC,
              "version": consts.ZIP_MADE_BY_VERSION,
              "system": consts.ZIP_MADE_BY_SYSTEM,
              "version_ndd": consts.ZIP_VERSION,
              "flags": consts.FLAGS,
              "compression": consts.COMPRESSION_STORE,
              "mod_time": _u16(mod_time),
              "mod_date": _u16(mod_date),
              "crc": _u32(crc),
              "comp_size": _u32(size),
              "uncomp_size": _u32(size),
              "fname_len": _u16(len(fname)),
              "extra_len": 0,
              "fcomm_len": 0,
              "disk_start": 0,
              "attrs_int": 0,
              "attrs_ext": consts.EXTERNAL_ATTRS,
              "offset": _u32(offset)}
    cdfh = consts.CDLF_TUPLE(**fields)
    return consts.CDLF_STRUCT.pack(*cdfh) + fname


def end_of_central_directory(entries, cd_size, cd_offset):
    fields = {"signature": consts.CD_END_MAGIC,
              "disk_num": 0,
              "disk_cdstart": 0,
              "disk_entries": _u16(entries),
              "total_entries": _u16(entries),
              "cd_size": _u32(cd_size),
              "cd_offset": _u32(cd_offset),
              "comment_len": 0}
    cdend = consts.CD_END_TUPLE(**fields)
    return consts.CD_END_STRUCT.pack(*cdend)


def archive_size(entries):
    """
    Calculate the exact size of an archive holding given files.

    entries - iterable of (name, size) pairs, name is str or bytes
              and size is the payload length in bytes.

    Useful for sending Content-Length before any byte is streamed.
    """
    per_file = (consts.LF_STRUCT.size + consts.DD_STRUCT.size
                + consts.CDLF_STRUCT.size)
    total = 0
    for name, size in entries:
        total += per_file + 2 * len(encode_name(name)) + size
    return total + consts.CD_END_STRUCT.size
