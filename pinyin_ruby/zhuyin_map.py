"""
Pinyin syllable -> Zhuyin (Bopomofo) dictionary.

Keys are lowercase, tone-free pinyin syllables ("ni", "lü", "lv");
values are untoned Zhuyin ("ㄋㄧ", "ㄌㄩ"). The table is built once at import
from the list of valid Mandarin syllables, and can be extended or overridden
from a JSON file with load_zhuyin_map().
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

INITIALS = {
    'b': 'ㄅ', 'p': 'ㄆ', 'm': 'ㄇ', 'f': 'ㄈ',
    'd': 'ㄉ', 't': 'ㄊ', 'n': 'ㄋ', 'l': 'ㄌ',
    'g': 'ㄍ', 'k': 'ㄎ', 'h': 'ㄏ',
    'j': 'ㄐ', 'q': 'ㄑ', 'x': 'ㄒ',
    'zh': 'ㄓ', 'ch': 'ㄔ', 'sh': 'ㄕ', 'r': 'ㄖ',
    'z': 'ㄗ', 'c': 'ㄘ', 's': 'ㄙ',
}

FINALS = {
    'a': 'ㄚ', 'o': 'ㄛ', 'e': 'ㄜ', 'ê': 'ㄝ',
    'ai': 'ㄞ', 'ei': 'ㄟ', 'ao': 'ㄠ', 'ou': 'ㄡ',
    'an': 'ㄢ', 'en': 'ㄣ', 'ang': 'ㄤ', 'eng': 'ㄥ', 'er': 'ㄦ',
    'ong': 'ㄨㄥ',
    'i': 'ㄧ', 'ia': 'ㄧㄚ', 'io': 'ㄧㄛ', 'ie': 'ㄧㄝ', 'iai': 'ㄧㄞ',
    'iao': 'ㄧㄠ', 'iu': 'ㄧㄡ', 'iou': 'ㄧㄡ', 'ian': 'ㄧㄢ', 'in': 'ㄧㄣ',
    'iang': 'ㄧㄤ', 'ing': 'ㄧㄥ', 'iong': 'ㄩㄥ',
    'u': 'ㄨ', 'ua': 'ㄨㄚ', 'uo': 'ㄨㄛ', 'uai': 'ㄨㄞ', 'ui': 'ㄨㄟ',
    'uei': 'ㄨㄟ', 'uan': 'ㄨㄢ', 'un': 'ㄨㄣ', 'uen': 'ㄨㄣ',
    'uang': 'ㄨㄤ', 'ueng': 'ㄨㄥ',
    'ü': 'ㄩ', 'üe': 'ㄩㄝ', 'üan': 'ㄩㄢ', 'ün': 'ㄩㄣ',
}

# Zero-initial spellings: y/w replace or prefix the medial
_ZERO_INITIAL = {
    'yi': 'i', 'ya': 'ia', 'yo': 'io', 'ye': 'ie', 'yai': 'iai', 'yao': 'iao',
    'you': 'iu', 'yan': 'ian', 'yin': 'in', 'yang': 'iang', 'ying': 'ing',
    'yong': 'iong', 'yu': 'ü', 'yue': 'üe', 'yuan': 'üan', 'yun': 'ün',
    'wu': 'u', 'wa': 'ua', 'wo': 'uo', 'wai': 'uai', 'wei': 'ui',
    'wan': 'uan', 'wen': 'un', 'wang': 'uang', 'weng': 'ueng',
}

# Syllabic consonants and interjections
_SPECIAL = {
    'm': 'ㄇ', 'n': 'ㄋ', 'ng': 'ㄫ', 'hm': 'ㄏㄇ', 'hng': 'ㄏㄫ',
}

# zhi chi shi ri zi ci si: the "i" is not written in Zhuyin
_APICAL_INITIALS = {'zh', 'ch', 'sh', 'r', 'z', 'c', 's'}

SYLLABLES = '''
a ai an ang ao e ei en eng er o ou ê
yi ya yo ye yai yao you yan yin yang ying yong yu yue yuan yun
wu wa wo wai wei wan wen wang weng
ba bai ban bang bao bei ben beng bi bian biao bie bin bing bo bu
pa pai pan pang pao pei pen peng pi pian piao pie pin ping po pou pu
ma mai man mang mao me mei men meng mi mian miao mie min ming miu mo mou mu
fa fan fang fei fen feng fiao fo fou fu
da dai dan dang dao de dei den deng di dia dian diao die ding diu dong dou
du duan dui dun duo
ta tai tan tang tao te tei teng ti tian tiao tie ting tong tou tu tuan tui
tun tuo
na nai nan nang nao ne nei nen neng ni nian niang niao nie nin ning niu
nong nou nu nuan nun nuo nü nüe
la lai lan lang lao le lei leng li lia lian liang liao lie lin ling liu lo
long lou lu luan lun luo lü lüe
ga gai gan gang gao ge gei gen geng gong gou gu gua guai guan guang gui gun
guo
ka kai kan kang kao ke kei ken keng kong kou ku kua kuai kuan kuang kui kun
kuo
ha hai han hang hao he hei hen heng hong hou hu hua huai huan huang hui hun
huo
ji jia jian jiang jiao jie jin jing jiong jiu ju juan jue jun
qi qia qian qiang qiao qie qin qing qiong qiu qu quan que qun
xi xia xian xiang xiao xie xin xing xiong xiu xu xuan xue xun
zha zhai zhan zhang zhao zhe zhei zhen zheng zhi zhong zhou zhu zhua zhuai
zhuan zhuang zhui zhun zhuo
cha chai chan chang chao che chen cheng chi chong chou chu chua chuai chuan
chuang chui chun chuo
sha shai shan shang shao she shei shen sheng shi shou shu shua shuai shuan
shuang shui shun shuo
ran rang rao re ren reng ri rong rou ru rua ruan rui run ruo
za zai zan zang zao ze zei zen zeng zi zong zou zu zuan zui zun zuo
ca cai can cang cao ce cen ceng ci cong cou cu cuan cui cun cuo
sa sai san sang sao se sen seng si song sou su suan sui sun suo
'''.split()


def _split_initial(syllable: str) -> tuple[str, str]:
    for size in (2, 1):
        head = syllable[:size]
        if head in INITIALS and len(syllable) > size:
            return head, syllable[size:]
    return '', syllable


def syllable_to_zhuyin(syllable: str) -> str | None:
    """Spell one untoned pinyin syllable in Zhuyin, or None if it is not one."""
    syllable = syllable.lower().replace('v', 'ü')
    if syllable in _SPECIAL:
        return _SPECIAL[syllable]
    if syllable in _ZERO_INITIAL:
        return FINALS[_ZERO_INITIAL[syllable]]

    initial, final = _split_initial(syllable)
    if initial in _APICAL_INITIALS and final == 'i':
        return INITIALS[initial]
    if initial in ('j', 'q', 'x') and final.startswith('u'):
        final = 'ü' + final[1:]
    if final not in FINALS:
        return None
    return INITIALS.get(initial, '') + FINALS[final]


def build_zhuyin_map(syllables=SYLLABLES) -> dict[str, str]:
    """Build the syllable dictionary, with "v" spellings as aliases for "ü"."""
    mapping = {}
    for syllable in syllables:
        zhuyin = syllable_to_zhuyin(syllable)
        if zhuyin is None:
            logger.warning(f'No Zhuyin spelling for syllable: {syllable}')
            continue
        mapping[syllable] = zhuyin
        if 'ü' in syllable:
            mapping[syllable.replace('ü', 'v')] = zhuyin
    mapping.update(_SPECIAL)
    return mapping


PINYIN_TO_ZHUYIN = build_zhuyin_map()


def load_zhuyin_map(path: str | Path | None = None) -> dict[str, str]:
    """
    Return the syllable dictionary, merged with overrides from a JSON file.

    The file holds a single object of pinyin -> Zhuyin strings. Keys are
    lower-cased. An unreadable or malformed file is logged and ignored.
    """
    mapping = dict(PINYIN_TO_ZHUYIN)
    if not path:
        return mapping

    try:
        with open(path, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f'Could not read Zhuyin overrides from {path}: {e}')
        return mapping

    if not isinstance(overrides, dict):
        logger.warning(f'Zhuyin overrides in {path} are not a JSON object, ignoring')
        return mapping

    for key, value in overrides.items():
        if isinstance(key, str) and isinstance(value, str):
            mapping[key.lower()] = value
    logger.debug(f'Loaded {len(overrides)} Zhuyin overrides from {path}')
    return mapping
