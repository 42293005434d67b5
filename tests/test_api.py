import threading

from fastapi.testclient import TestClient

from textgen import main

cli = TestClient(main.app)


def setup_function():
    main.dictionary, main.word_graph = main._new_models(main.DEFAULT_CORPUS)


def test_root():
    r = cli.get("/")
    assert r.status_code == 200
    assert r.json()["frozen"] is False


def test_generate():
    r = cli.post("/generate", json={"num_words": 8, "num_sentences": 3, "seed": 1})
    assert r.status_code == 200
    out = r.json()
    assert out["model"] == "word_graph"
    assert len(out["sentences"]) == 3
    assert all(len(s.split(" ")) == 9 for s in out["sentences"])


def test_generate_seeded_is_reproducible():
    payload = {"num_words": 20, "seed": 42}
    a = cli.post("/generate", json=payload).json()["sentences"]
    b = cli.post("/generate", json=payload).json()["sentences"]
    assert a == b


def test_generate_with_dictionary():
    r = cli.post("/generate_with_dictionary", json={"num_words": 5})
    assert r.status_code == 200
    assert len(r.json()["sentences"][0].split(" ")) == 5


def test_generate_rejects_bad_request():
    assert cli.post("/generate", json={"num_words": -1}).status_code == 422
    assert cli.post("/generate", json={"num_sentences": 0}).status_code == 422


def test_corpus_then_freeze():
    r = cli.post("/corpus", json={"texts": ["Zebras graze quietly."]})
    assert r.status_code == 200
    assert cli.post("/freeze").status_code == 200
    assert cli.get("/").json()["frozen"] is True

    r = cli.post("/corpus", json={"texts": ["too late"]})
    assert r.status_code == 409


def test_reset_then_empty_corpus():
    assert cli.delete("/corpus").status_code == 200
    r = cli.post("/generate", json={"num_words": 3})
    assert r.status_code == 400

    cli.post("/corpus", json={"texts": ["hello world"]})
    r = cli.post("/generate_with_dictionary", json={"num_words": 2, "seed": 0})
    assert r.status_code == 200


def test_stats():
    r = cli.get("/stats", params={"top": 3})
    assert r.status_code == 200
    body = r.json()
    assert len(body["dictionary"]["top"]) == 3
    assert body["dictionary"]["top"][0] == {"word": "the", "count": 5}
    assert body["word_graph"]["words"] > 0


def test_stats_waits_for_corpus_updates():
    done = threading.Event()

    def read_stats():
        main.stats(3)
        done.set()

    with main._model_lock:
        t = threading.Thread(target=read_stats)
        t.start()
        assert not done.wait(0.2)
    t.join(5)
    assert done.is_set()
