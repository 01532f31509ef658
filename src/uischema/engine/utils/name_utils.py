# engine/utils/name_utils.py

import re
from typing import Iterator, List

# 字母数字片段 (Unicode)，下划线与其它符号均视为分隔符
_CHUNK_PATTERN = re.compile(r"[^\W_]+")

def _scan_chunk(chunk: str) -> Iterator[str]:
    """
    与前端 lodash 的 words() 切分规则保持一致：
    连续大写缩写、首字母大写单词、小写单词、数字各成一段。
    大小写判断使用 str.isupper / str.islower，非 ASCII 字母同样适用。
    """
    i, n = 0, len(chunk)
    while i < n:
        # 1. 连续大写缩写：其后为结尾，或为 "大写+小写" 开头的新单词
        j = i
        while j < n and chunk[j].isupper():
            j += 1
        if j - i >= 2:
            end = j if j == n else (j - 1 if chunk[j].islower() else i)
            if end - i >= 2:
                yield chunk[i:end]
                i = end
                continue

        # 2. 可选的首字母大写 + 小写字母 + 可选数字
        k = i + 1 if chunk[i].isupper() else i
        m = k
        while m < n and chunk[m].islower():
            m += 1
        if m > k:
            while m < n and chunk[m].isdigit():
                m += 1
            yield chunk[i:m]
            i = m
            continue

        # 3. 数字串
        if chunk[i].isdigit():
            m = i
            while m < n and chunk[m].isdigit():
                m += 1
            yield chunk[i:m]
            i = m
            continue

        # 4. 无大小写的文字 (如中日韩文字) 连成一段
        if not chunk[i].isupper():
            m = i
            while m < n and chunk[m].isalpha() and not chunk[m].isupper() and not chunk[m].islower():
                m += 1
            if m > i:
                yield chunk[i:m]
                i = m
                continue

        # 5. 单个字符
        yield chunk[i]
        i += 1

def split_words(text: str) -> List[str]:
    text = re.sub(r"['’]", "", text or "")
    return [word for chunk in _CHUNK_PATTERN.findall(text) for word in _scan_chunk(chunk)]

def to_camel_case(text: str) -> str:
    """'Full Name field' -> 'fullNameField'"""
    words = split_words(text)
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(word.lower().capitalize() for word in tail)
