from typing import List, Optional


def get_chunk_index_by_name(chunks, name: str) -> Optional[int]:
    '''Return the position of the first chunk with the type named "name", None if missing.'''
    for idx, chunk in enumerate(chunks):
        if str(chunk.chunk_type) == name:
            return idx

    return None


def get_chunks_by_name(chunks, name: str) -> List:
    return [_ for _ in chunks if str(_.chunk_type) == name]
