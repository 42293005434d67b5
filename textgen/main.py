import os
import random
import threading
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .bigram_model import WordGraph
from .dictionary import Dictionary
from .errors import FrozenModelError, InternalInvariantError, InvalidFrequencyError

app = FastAPI(title="Text workload generator")

# -----------------------
# Config
# -----------------------
DEFAULT_CORPUS = [
    "The Count of Monte Cristo is a novel written by Alexandre Dumas.",
    "City council approves new budget for schools. Teachers welcome the raise.",
    "Stocks fell sharply on Monday as investors weighed new data on inflation.",
    "A storm is expected to bring heavy rain to the coast this weekend.",
    "The museum opens a new exhibit on ancient maps of the world.",
]

MAX_WORDS = int(os.getenv("TEXTGEN_MAX_WORDS", "1000"))
MAX_SENTENCES = int(os.getenv("TEXTGEN_MAX_SENTENCES", "100"))

_seed = os.getenv("TEXTGEN_SEED")
_rng = random.Random(int(_seed) if _seed else None)
_rng_lock = threading.Lock()

# -----------------------
# Models
# -----------------------
# Ingestion and freezing go through _model_lock; generation only reads
# frozen models.
_model_lock = threading.Lock()


def _new_models(corpus):
    dictionary = Dictionary()
    word_graph = WordGraph()
    for text in corpus:
        dictionary.add_text(text)
        word_graph.add_text(text)
    return dictionary, word_graph


dictionary, word_graph = _new_models(DEFAULT_CORPUS)


def _frozen_models():
    with _model_lock:
        try:
            dictionary.freeze()
            word_graph.freeze()
        except InvalidFrequencyError as e:
            print(f"[FREEZE] Failed: {e}")
            raise HTTPException(status_code=400, detail=f"Cannot build models: {e}")
    return dictionary, word_graph


def _request_rng(seed: Optional[int]):
    if seed is not None:
        return random.Random(seed)
    with _rng_lock:
        return random.Random(_rng.getrandbits(64))


# -----------------------
# Request schemas
# -----------------------
class CorpusRequest(BaseModel):
    texts: List[str] = Field(min_length=1)


class GenerationRequest(BaseModel):
    num_words: int = Field(default=10, ge=0, le=MAX_WORDS)
    num_sentences: int = Field(default=1, ge=1, le=MAX_SENTENCES)
    seed: Optional[int] = None


# -----------------------
# Root & corpus
# -----------------------
@app.get("/")
def root():
    return {
        "status": "Text workload generator active",
        "frozen": word_graph.frozen and dictionary.frozen,
        "dictionary_words": len(dictionary),
        "graph_words": len(word_graph),
    }


@app.post("/corpus")
def add_corpus(req: CorpusRequest):
    with _model_lock:
        try:
            for text in req.texts:
                dictionary.add_text(text)
                word_graph.add_text(text)
        except FrozenModelError as e:
            print(f"[CORPUS] Rejected: {e}")
            raise HTTPException(
                status_code=409,
                detail=f"Models are frozen; reset the corpus first ({e})",
            )
        return {"added": len(req.texts), "dictionary_words": len(dictionary), "graph_words": len(word_graph)}


@app.delete("/corpus")
def reset_corpus():
    global dictionary, word_graph
    with _model_lock:
        dictionary, word_graph = _new_models([])
    print("[CORPUS] Reset")
    return {"status": "reset"}


@app.post("/freeze")
def freeze():
    d, g = _frozen_models()
    print(f"[FREEZE] Complete: {len(d)} dictionary words, {len(g)} graph words")
    return {"frozen": True, "dictionary_words": len(d), "graph_words": len(g)}


# -----------------------
# Generation
# -----------------------
@app.post("/generate")
def generate(req: GenerationRequest):
    _, g = _frozen_models()
    rng = _request_rng(req.seed)
    try:
        sentences = [g.random_sentence(req.num_words, rng) for _ in range(req.num_sentences)]
    except InternalInvariantError as e:
        print(f"[GENERATE] Word graph failed: {e}")
        raise HTTPException(status_code=500, detail=f"Word graph generation failed: {e}")
    return {"sentences": sentences, "model": "word_graph"}


@app.post("/generate_with_dictionary")
def generate_with_dictionary(req: GenerationRequest):
    d, _ = _frozen_models()
    rng = _request_rng(req.seed)
    try:
        sentences = [d.random_sentence(req.num_words, rng) for _ in range(req.num_sentences)]
    except InternalInvariantError as e:
        print(f"[GENERATE] Dictionary failed: {e}")
        raise HTTPException(status_code=500, detail=f"Dictionary generation failed: {e}")
    return {"sentences": sentences, "model": "dictionary"}


@app.get("/stats")
def stats(top: int = 10):
    with _model_lock:
        d = dictionary.stats(top)
        g = word_graph.stats(top)
    return {
        "dictionary": {
            "words": d.words,
            "tokens": d.tokens,
            "top": [{"word": w, "count": c} for w, c in d.top],
        },
        "word_graph": {
            "words": g.words,
            "edges": g.edges,
            "transitions": g.transitions,
            "top": [{"word": w, "count": c} for w, c in g.top],
        },
    }
