# timeline/tagging.py
import abc
import re


class BasePostTagger(abc.ABC):
    """Assigns an optional tag to a post's text"""

    @abc.abstractmethod
    def tag(self, content):
        """Return a tag dict ({'key', 'label'}) or None"""
        pass


class KeywordPostTagger(BasePostTagger):
    """First matching keyword group wins, in RULES order"""

    RULES = [
        ('issue', '이슈', r'고장|불만|사고|파손|문제|부서|부셨|깨짐|깨졌|망가|박살|컴플레인|항의'),
        ('supply', '물품', r'부족|주문|재고|도착|없음|떨어|모자|비품'),
        ('task', '업무', r'완료|청소|마감|체크|정산|오픈|준비'),
    ]

    def __init__(self, rules=None):
        self.rules = [(key, label, re.compile(pattern))
                      for key, label, pattern in (rules or self.RULES)]

    def tag(self, content):
        for key, label, pattern in self.rules:
            if pattern.search(content or ''):
                return {'key': key, 'label': label}
        return None


default_tagger = KeywordPostTagger()
