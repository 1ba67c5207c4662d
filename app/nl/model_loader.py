from typing import Tuple

import torch
from transformers import AutoTokenizer, AutoModelForCausalLM, AutoModelForSeq2SeqLM
from app.settings import SUMMARY_MODEL_ID, SUMMARY_MAX_NEW_TOKENS, TRANSFORMERS_CACHE

CACHE_DIR = str(TRANSFORMERS_CACHE)

# Loaded once per process
_tokenizer = None
_model = None
_is_seq2seq = False


def _pick_device() -> str:
    if torch.cuda.is_available():
        return "cuda"
    if (
        hasattr(torch.backends, "mps")
        and torch.backends.mps.is_available()
        and torch.backends.mps.is_built()
    ):
        return "mps"
    return "cpu"


def load_model() -> Tuple[AutoTokenizer, torch.nn.Module, bool]:
    """
    Load the summary model named in settings.
    Tries a causal LM first, then falls back to a seq2seq LM.
    """
    global _tokenizer, _model, _is_seq2seq

    TRANSFORMERS_CACHE.mkdir(parents=True, exist_ok=True)
    device = _pick_device()
    dtype = torch.float32 if device == "cpu" else torch.float16

    tok = AutoTokenizer.from_pretrained(SUMMARY_MODEL_ID, use_fast=True, cache_dir=CACHE_DIR)
    if tok.pad_token_id is None:
        tok.pad_token = tok.eos_token or tok.unk_token or "</s>"

    try:
        model = AutoModelForCausalLM.from_pretrained(
            SUMMARY_MODEL_ID, cache_dir=CACHE_DIR, torch_dtype=dtype, low_cpu_mem_usage=True,
        )
        is_seq2seq = False
    except (OSError, ValueError):
        # e.g. T5/mT5 checkpoints
        model = AutoModelForSeq2SeqLM.from_pretrained(
            SUMMARY_MODEL_ID, cache_dir=CACHE_DIR, torch_dtype=dtype, low_cpu_mem_usage=True,
        )
        is_seq2seq = True

    model.to(device)
    model.eval()

    _tokenizer, _model, _is_seq2seq = tok, model, is_seq2seq
    return _tokenizer, _model, _is_seq2seq


def _render_prompt(tok, prompt: str, is_seq2seq: bool) -> str:
    # Instruction-tuned causal models expect their own chat format
    if not is_seq2seq and getattr(tok, "chat_template", None):
        return tok.apply_chat_template(
            [{"role": "user", "content": prompt}], tokenize=False, add_generation_prompt=True
        )
    return prompt


def generate(prompt: str, max_new_tokens: int | None = None) -> str:
    """
    Greedy generation with the loaded model (loads it on first call).
    Returns only the completion, without the prompt.
    """
    if _tokenizer is None or _model is None:
        load_model()

    tok, model, is_seq2seq = _tokenizer, _model, _is_seq2seq
    device = next(model.parameters()).device
    max_new = max_new_tokens or SUMMARY_MAX_NEW_TOKENS

    text = _render_prompt(tok, prompt, is_seq2seq)
    enc = tok(text, return_tensors="pt", padding=False, truncation=True).to(device)

    with torch.no_grad():
        out_ids = model.generate(
            **enc,
            max_new_tokens=max_new,
            do_sample=False,
            num_beams=1,
            eos_token_id=tok.eos_token_id or tok.pad_token_id,
            pad_token_id=tok.pad_token_id or tok.eos_token_id,
        )

    if is_seq2seq:
        return tok.decode(out_ids[0], skip_special_tokens=True).strip()
    prompt_len = enc["input_ids"].shape[-1]
    return tok.decode(out_ids[0][prompt_len:], skip_special_tokens=True).strip()
