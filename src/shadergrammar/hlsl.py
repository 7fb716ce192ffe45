"""HLSL/SDSL grammar — keyword tables and token rules."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from shadergrammar.grammar import (
    C_BLOCK_COMMENT,
    C_LINE_COMMENT,
    LINE_END,
    QUOTE_STRING,
    GrammarDefinition,
    KeywordSet,
    TokenRule,
)
from shadergrammar.tokens import TokenCategory

if TYPE_CHECKING:
    from shadergrammar.registry import LanguageRegistry

NAME = "HLSL"
PRIMARY_NAME = "hlsl"
ALIAS_NAME = "sdsl"

BASE_TYPES: tuple[str, ...] = (
    "bool",
    "double",
    "float",
    "half",
    "int",
    "uint",
    "min16float",
    "min10float",
    "min16int",
    "min12int",
    "min16uint",
)


def dimension_suffixes() -> tuple[str, ...]:
    """Scalar, vector 1-4, then matrix 1x1 through 4x4 (row-major order)."""
    vectors = tuple(str(n) for n in range(1, 5))
    matrices = tuple(f"{r}x{c}" for r in range(1, 5) for c in range(1, 5))
    return ("",) + vectors + matrices


DIMENSION_SUFFIXES = dimension_suffixes()


def expand_type_names(bases: Iterable[str], suffixes: Iterable[str]) -> frozenset[str]:
    """Every base name concatenated with every suffix (float, float3, float3x4, ...)."""
    suffixes = tuple(suffixes)
    return frozenset(base + suffix for base in bases for suffix in suffixes)


OBJECT_TYPES = (
    "void vector matrix string dword "
    "Buffer StructuredBuffer RWBuffer RWStructuredBuffer ByteAddressBuffer RWByteAddressBuffer "
    "AppendStructuredBuffer ConsumeStructuredBuffer "
    "Texture1D Texture1DArray Texture2D Texture2DArray Texture2DMS Texture2DMSArray Texture3D "
    "TextureCube TextureCubeArray "
    "RWTexture1D RWTexture1DArray RWTexture2D RWTexture2DArray RWTexture3D "
    "SamplerState SamplerComparisonState sampler texture "
    "InputPatch OutputPatch TriangleStream LineStream PointStream "
    "VertexShader PixelShader GeometryShader HullShader DomainShader ComputeShader"
)

BUILTINS = (
    "abs acos all AllMemoryBarrier AllMemoryBarrierWithGroupSync any asdouble asfloat asin "
    "asint asuint atan atan2 "
    "ceil CheckAccessFullyMapped clamp clip cos cosh countbits cross "
    "D3DCOLORtoUBYTE4 ddx ddx_coarse ddx_fine ddy ddy_coarse ddy_fine degrees determinant "
    "DeviceMemoryBarrier DeviceMemoryBarrierWithGroupSync distance dot dst "
    "EvaluateAttributeAtCentroid EvaluateAttributeAtSample EvaluateAttributeSnapped exp exp2 "
    "f16tof32 f32tof16 faceforward firstbithigh firstbitlow floor fma fmod frac frexp fwidth "
    "GetRenderTargetSampleCount GetRenderTargetSamplePosition GroupMemoryBarrier "
    "GroupMemoryBarrierWithGroupSync "
    "InterlockedAdd InterlockedAnd InterlockedCompareExchange InterlockedCompareStore "
    "InterlockedExchange InterlockedMax InterlockedMin InterlockedOr InterlockedXor "
    "isfinite isinf isnan ldexp length lerp lit log log10 log2 "
    "mad max min modf msad4 mul noise normalize pow "
    "radians rcp reflect refract reversebits round rsqrt saturate sign sin sincos sinh "
    "smoothstep sqrt step "
    "tan tanh tex1D tex1Dbias tex1Dgrad tex1Dlod tex1Dproj tex2D tex2Dbias tex2Dgrad tex2Dlod "
    "tex2Dproj tex3D tex3Dbias tex3Dgrad tex3Dlod tex3Dproj texCUBE texCUBEbias texCUBEgrad "
    "texCUBElod texCUBEproj transpose trunc "
    "Sample SampleLevel SampleGrad SampleCmp SampleCmpLevelZero Load Store GetDimensions"
)

KEYWORDS = (
    # Control flow and declarations
    "break case continue default discard do else for if return switch while "
    "struct class interface namespace typedef "
    "cbuffer tbuffer technique technique10 technique11 pass "
    "in out inout uniform const static extern inline "
    "register packoffset "
    "linear centroid nointerpolation noperspective sample "
    "row_major column_major "
    "precise groupshared shared volatile "
    "export compile compile_fragment "
    # SDSL
    "shader stage stream streams compose override clone base mixin"
)

LITERALS = "true false NULL"

PREPROCESSOR_DIRECTIVES = (
    "define undef if ifdef ifndef else elif endif include pragma line error warning"
)

SEMANTIC_NAMES = (
    r"SV_\w+",
    r"POSITION\d*",
    r"NORMAL\d*",
    r"TEXCOORD\d*",
    r"COLOR\d*",
    r"TANGENT\d*",
    r"BINORMAL\d*",
    r"BLENDWEIGHT\d*",
    r"BLENDINDICES\d*",
    r"PSIZE\d*",
    r"TESSFACTOR\d*",
    r"DEPTH\d*",
    "FOG",
    "VFACE",
    "VPOS",
    "POSITIONT",
)

ENTRY_POINTS = ("VSMain", "PSMain", "GSMain", "HSMain", "DSMain", "CSMain")

# Longer forms first; the bare integer is the fallback.
NUMBER = TokenRule(
    category=TokenCategory.NUMBER,
    variants=(
        r"\b0[xX][a-fA-F0-9]+[uUlL]?",
        r"\b\d+\.\d*([eE][-+]?\d+)?[fFhHlL]?",
        r"\b\.\d+([eE][-+]?\d+)?[fFhHlL]?",
        r"\b\d+([eE][-+]?\d+)?[fFhHlL]?",
        r"\b\d+[uUlL]?",
    ),
    relevance=0,
)

PREPROCESSOR = TokenRule(
    begin=r"#\s*[a-z]+\b",
    end=LINE_END,
    category=TokenCategory.META,
    keywords=(KeywordSet.from_words(TokenCategory.KEYWORD, PREPROCESSOR_DIRECTIVES),),
    contains=(
        TokenRule(begin=r"\\\r?\n", relevance=0),
        C_LINE_COMMENT,
        C_BLOCK_COMMENT,
        QUOTE_STRING,
        TokenRule(begin=r"<", end=r">", category=TokenCategory.STRING, illegal=r"\n"),
    ),
)

# Anchored on the colon so `class Derived : Base` is left alone.
SEMANTIC = TokenRule(
    begin=r":\s*(" + "|".join(SEMANTIC_NAMES) + r")\b",
    category=TokenCategory.SYMBOL,
    relevance=10,
)

ENTRY_POINT = TokenRule(
    begin=r"\b(" + "|".join(ENTRY_POINTS) + r")\b",
    category=TokenCategory.TITLE_FUNCTION,
)


def type_keywords() -> KeywordSet:
    words = expand_type_names(BASE_TYPES, DIMENSION_SUFFIXES) | frozenset(OBJECT_TYPES.split())
    return KeywordSet(TokenCategory.TYPE, words)


def build_grammar() -> GrammarDefinition:
    """Return the HLSL/SDSL grammar definition."""
    return GrammarDefinition(
        name=NAME,
        case_insensitive=False,
        keywords=(
            KeywordSet.from_words(TokenCategory.KEYWORD, KEYWORDS),
            type_keywords(),
            KeywordSet.from_words(TokenCategory.BUILT_IN, BUILTINS),
            KeywordSet.from_words(TokenCategory.LITERAL, LITERALS),
        ),
        rules=(
            C_LINE_COMMENT,
            C_BLOCK_COMMENT,
            PREPROCESSOR,
            QUOTE_STRING,
            NUMBER,
            SEMANTIC,
            ENTRY_POINT,
        ),
    )


def register(registry: LanguageRegistry) -> GrammarDefinition:
    """Register the grammar as ``hlsl`` and ``sdsl``; return it."""
    grammar = build_grammar()
    registry.register_language(PRIMARY_NAME, grammar)
    registry.register_language(ALIAS_NAME, grammar)
    return grammar
