"""
Static fallback sets, bundled with the package.

Used only when every source of a catalog fails on a cold cache. Records use
the CatalogEntry.to_dict() shape and the same id scheme as the live
normalizers, so fallback entries are replaced (not duplicated) once a live
refresh succeeds.

Bump FALLBACK_VERSION whenever the data below changes.
"""

import logging
from typing import Any

from .base import CatalogEntry
from .errors import MalformedFallbackData

logger = logging.getLogger(__name__)

FALLBACK_VERSION = "2023.12.1"
FALLBACK_SOURCE = "fallback"

_REQUIRED_FIELDS = ("id", "name", "url", "category")


KAGGLE_DATASETS: list[dict[str, Any]] = [
    {"id": "kaggle:awsaf49/coco-2017-dataset", "name": "COCO 2017",
     "description": "Common Objects in Context - The dataset for object detection, segmentation, and captioning with over 330K images.",
     "url": "https://www.kaggle.com/datasets/awsaf49/coco-2017-dataset",
     "tags": ["vision", "object-detection", "image-segmentation", "captioning"],
     "category": "vision", "popularityMetric": 154820, "lastUpdated": "2023-03-15T00:00:00Z",
     "size": "19GB"},
    {"id": "kaggle:kazanova/sentiment140", "name": "Sentiment140",
     "description": "Twitter sentiment analysis dataset with 1.6M tweets labeled for sentiment analysis.",
     "url": "https://www.kaggle.com/datasets/kazanova/sentiment140",
     "tags": ["nlp", "sentiment-analysis", "twitter", "social-media"],
     "category": "nlp", "popularityMetric": 98765, "lastUpdated": "2022-11-02T00:00:00Z",
     "size": "238MB"},
    {"id": "kaggle:shreenidhihipparagi/google-stock-prediction", "name": "Google Stock Data",
     "description": "Historical stock data for Google/Alphabet with daily prices and trading volumes.",
     "url": "https://www.kaggle.com/datasets/shreenidhihipparagi/google-stock-prediction",
     "tags": ["finance", "time-series", "stock-market", "prediction"],
     "category": "tabular", "popularityMetric": 43210, "lastUpdated": "2023-05-20T00:00:00Z",
     "size": "115KB"},
    {"id": "kaggle:paultimothymooney/chest-xray-pneumonia", "name": "Chest X-Ray Images (Pneumonia)",
     "description": "Medical imaging dataset with chest X-rays for pneumonia detection and classification.",
     "url": "https://www.kaggle.com/datasets/paultimothymooney/chest-xray-pneumonia",
     "tags": ["medical", "vision", "x-ray", "healthcare"],
     "category": "vision", "popularityMetric": 76543, "lastUpdated": "2022-09-10T00:00:00Z",
     "size": "2.29GB"},
    {"id": "kaggle:mczielinski/bitcoin-historical-data", "name": "Bitcoin Historical Data",
     "description": "Comprehensive Bitcoin price and volume data from 2013 to present with minute-level granularity.",
     "url": "https://www.kaggle.com/datasets/mczielinski/bitcoin-historical-data",
     "tags": ["cryptocurrency", "finance", "time-series", "blockchain"],
     "category": "tabular", "popularityMetric": 54321, "lastUpdated": "2023-06-15T00:00:00Z",
     "size": "358MB"},
]

HUGGINGFACE_DATASETS: list[dict[str, Any]] = [
    {"id": "hf-dataset:glue", "name": "GLUE Benchmark",
     "description": "General Language Understanding Evaluation benchmark - collection of resources for training and evaluating NLP systems.",
     "url": "https://huggingface.co/datasets/glue",
     "tags": ["nlp", "benchmark", "language-understanding", "evaluation"],
     "category": "nlp", "popularityMetric": 87654, "lastUpdated": "2023-01-20T00:00:00Z"},
    {"id": "hf-dataset:squad", "name": "SQUAD",
     "description": "Stanford Question Answering Dataset with 100K+ question-answer pairs on Wikipedia articles.",
     "url": "https://huggingface.co/datasets/squad",
     "tags": ["nlp", "question-answering", "reading-comprehension"],
     "category": "nlp", "popularityMetric": 65432, "lastUpdated": "2022-12-05T00:00:00Z"},
    {"id": "hf-dataset:wikitext", "name": "WikiText",
     "description": "Long-term dependency language modeling dataset with over 100M tokens extracted from verified Wikipedia articles.",
     "url": "https://huggingface.co/datasets/wikitext",
     "tags": ["nlp", "language-modeling", "wikipedia", "long-context"],
     "category": "nlp", "popularityMetric": 45678, "lastUpdated": "2022-10-15T00:00:00Z"},
]

# Also served live by PublicDatasetFetcher, which has no upstream API
PUBLIC_DATASETS: list[dict[str, Any]] = [
    {"id": "public:bdd-data.berkeley.edu", "name": "Berkeley DeepDrive",
     "description": "Large-scale driving dataset for autonomous driving research with 100K videos and 1100 hours of driving experience.",
     "url": "https://bdd-data.berkeley.edu/",
     "tags": ["vision", "autonomous-driving", "object-detection", "segmentation"],
     "category": "vision", "size": "1.8TB"},
    {"id": "public:open-images", "name": "Open Images",
     "description": "Dataset of ~9M images with image-level labels, object bounding boxes, visual relationships, and more.",
     "url": "https://storage.googleapis.com/openimages/web/index.html",
     "tags": ["vision", "object-detection", "image-classification", "segmentation"],
     "category": "vision", "size": "565GB"},
    {"id": "public:uci-ml-repository", "name": "UCI Machine Learning Repository",
     "description": "Collection of databases, domain theories, and data generators used by the machine learning community.",
     "url": "https://archive.ics.uci.edu/ml/index.php",
     "tags": ["tabular", "classification", "regression", "clustering"],
     "category": "tabular"},
]

REPOSITORIES: list[dict[str, Any]] = [
    {"id": "github:huggingface/transformers", "name": "transformers",
     "description": "Transformers: State-of-the-art Machine Learning for Pytorch, TensorFlow, and JAX.",
     "url": "https://github.com/huggingface/transformers",
     "tags": ["nlp", "deep-learning", "machine-learning", "transformers", "open-source"],
     "category": "Python", "popularityMetric": 112000, "lastUpdated": "2023-08-10T12:00:00Z",
     "fullName": "huggingface/transformers", "language": "Python", "forks": 21000, "isOpenSource": True},
    {"id": "github:tensorflow/tensorflow", "name": "tensorflow",
     "description": "An Open Source Machine Learning Framework for Everyone",
     "url": "https://github.com/tensorflow/tensorflow",
     "tags": ["machine-learning", "deep-learning", "neural-networks", "open-source"],
     "category": "C++", "popularityMetric": 178000, "lastUpdated": "2023-08-12T09:30:00Z",
     "fullName": "tensorflow/tensorflow", "language": "C++", "forks": 88000, "isOpenSource": True},
    {"id": "github:pytorch/pytorch", "name": "pytorch",
     "description": "Tensors and Dynamic neural networks in Python with strong GPU acceleration",
     "url": "https://github.com/pytorch/pytorch",
     "tags": ["deep-learning", "machine-learning", "neural-networks", "open-source"],
     "category": "Python", "popularityMetric": 69000, "lastUpdated": "2023-08-11T15:45:00Z",
     "fullName": "pytorch/pytorch", "language": "Python", "forks": 19000, "isOpenSource": True},
    {"id": "github:scikit-learn/scikit-learn", "name": "scikit-learn",
     "description": "scikit-learn: machine learning in Python",
     "url": "https://github.com/scikit-learn/scikit-learn",
     "tags": ["machine-learning", "data-science", "statistics", "open-source"],
     "category": "Python", "popularityMetric": 55000, "lastUpdated": "2023-08-09T11:20:00Z",
     "fullName": "scikit-learn/scikit-learn", "language": "Python", "forks": 25000, "isOpenSource": True},
    {"id": "github:facebookresearch/llama", "name": "llama",
     "description": "Inference code for LLaMA models",
     "url": "https://github.com/facebookresearch/llama",
     "tags": ["llm", "language-model", "ai", "open-source"],
     "category": "Python", "popularityMetric": 42000, "lastUpdated": "2023-08-08T10:15:00Z",
     "fullName": "facebookresearch/llama", "language": "Python", "forks": 7000, "isOpenSource": True},
    {"id": "github:huggingface/diffusers", "name": "diffusers",
     "description": "Diffusers: State-of-the-art diffusion models for image and audio generation in PyTorch",
     "url": "https://github.com/huggingface/diffusers",
     "tags": ["diffusion-models", "generative-ai", "stable-diffusion", "open-source"],
     "category": "Python", "popularityMetric": 28000, "lastUpdated": "2023-08-07T14:30:00Z",
     "fullName": "huggingface/diffusers", "language": "Python", "forks": 4500, "isOpenSource": True},
    {"id": "github:langchain-ai/langchain", "name": "langchain",
     "description": "Building applications with LLMs through composability",
     "url": "https://github.com/langchain-ai/langchain",
     "tags": ["llm", "ai", "agents", "open-source"],
     "category": "Python", "popularityMetric": 65000, "lastUpdated": "2023-08-13T08:45:00Z",
     "fullName": "langchain-ai/langchain", "language": "Python", "forks": 9000, "isOpenSource": True},
    {"id": "github:openai/whisper", "name": "whisper",
     "description": "Robust Speech Recognition via Large-Scale Weak Supervision",
     "url": "https://github.com/openai/whisper",
     "tags": ["speech-recognition", "audio", "machine-learning", "open-source"],
     "category": "Python", "popularityMetric": 47000, "lastUpdated": "2023-08-05T16:20:00Z",
     "fullName": "openai/whisper", "language": "Python", "forks": 5600, "isOpenSource": True},
    {"id": "github:compvis/stable-diffusion", "name": "stable-diffusion",
     "description": "A latent text-to-image diffusion model",
     "url": "https://github.com/CompVis/stable-diffusion",
     "tags": ["diffusion-models", "generative-ai", "text-to-image", "open-source"],
     "category": "Python", "popularityMetric": 58000, "lastUpdated": "2023-08-04T13:10:00Z",
     "fullName": "CompVis/stable-diffusion", "language": "Python", "forks": 8200, "isOpenSource": True},
    {"id": "github:nomic-ai/gpt4all", "name": "gpt4all",
     "description": "Open-source assistant-style LLMs that run locally on your CPU",
     "url": "https://github.com/nomic-ai/gpt4all",
     "tags": ["llm", "language-model", "ai", "open-source"],
     "category": "C++", "popularityMetric": 51000, "lastUpdated": "2023-08-14T09:50:00Z",
     "fullName": "nomic-ai/gpt4all", "language": "C++", "forks": 6800, "isOpenSource": True},
]

MODELS: list[dict[str, Any]] = [
    {"id": "hf-model:bert-base-uncased", "name": "BERT Base Uncased",
     "description": "12-layer, 768-hidden, 12-heads, 110M parameters. Trained on lower-cased English text.",
     "url": "https://huggingface.co/bert-base-uncased",
     "tags": ["bert", "text", "fill-mask", "transformer", "pytorch"],
     "category": "fill-mask", "popularityMetric": 5893421, "lastUpdated": "2023-01-15T10:23:45Z",
     "likes": 3275, "owner": "Google", "framework": "PyTorch", "size": "420 MB", "license": "Apache 2.0"},
    {"id": "hf-model:gpt2", "name": "GPT-2",
     "description": "GPT-2 124M parameter model. The full version of the OpenAI GPT-2 English language model.",
     "url": "https://huggingface.co/gpt2",
     "tags": ["gpt2", "text-generation", "transformer", "pytorch"],
     "category": "text-generation", "popularityMetric": 7812345, "lastUpdated": "2023-02-10T15:34:12Z",
     "likes": 4562, "owner": "OpenAI", "framework": "PyTorch", "size": "548 MB", "license": "MIT"},
    {"id": "hf-model:t5-base", "name": "T5 Base",
     "description": "T5 model with the base architecture (220M parameters), pre-trained on a multi-task mixture of unsupervised and supervised tasks.",
     "url": "https://huggingface.co/t5-base",
     "tags": ["t5", "text2text", "translation", "summarization", "question-answering", "tensorflow"],
     "category": "text2text-generation", "popularityMetric": 4156728, "lastUpdated": "2023-03-21T08:17:33Z",
     "likes": 1867, "owner": "Google", "framework": "TensorFlow", "size": "892 MB", "license": "Apache 2.0"},
    {"id": "hf-model:facebook/bart-large-cnn", "name": "BART Large CNN",
     "description": "BART model fine-tuned on CNN Daily Mail for summarization.",
     "url": "https://huggingface.co/facebook/bart-large-cnn",
     "tags": ["bart", "summarization", "transformer", "pytorch", "cnn"],
     "category": "summarization", "popularityMetric": 3452168, "lastUpdated": "2023-01-30T11:45:22Z",
     "likes": 2154, "owner": "Facebook AI", "framework": "PyTorch", "size": "1.6 GB", "license": "MIT",
     "isFineTuned": True},
    {"id": "hf-model:valhalla/t5-small-qa-qg-hl", "name": "T5 for Q&A and Question Generation",
     "description": "A t5-small model fine-tuned on question answering, question generation and highlight extraction.",
     "url": "https://huggingface.co/valhalla/t5-small-qa-qg-hl",
     "tags": ["t5", "question-answering", "question-generation", "fine-tuned", "pytorch"],
     "category": "question-answering", "popularityMetric": 1254367, "lastUpdated": "2023-04-05T14:18:56Z",
     "likes": 876, "owner": "valhalla", "framework": "PyTorch", "size": "300 MB", "license": "MIT",
     "isFineTuned": True},
    {"id": "hf-model:microsoft/dialogpt-medium", "name": "DialoGPT Medium",
     "description": "A GPT-2 medium model fine-tuned on dialogue from Reddit discussions for conversational response generation.",
     "url": "https://huggingface.co/microsoft/DialoGPT-medium",
     "tags": ["gpt2", "dialogue", "conversational", "fine-tuned", "pytorch"],
     "category": "conversational", "popularityMetric": 2876543, "lastUpdated": "2023-02-25T09:37:14Z",
     "likes": 2345, "owner": "Microsoft", "framework": "PyTorch", "size": "1.4 GB", "license": "MIT",
     "isFineTuned": True},
    {"id": "hf-model:sentence-transformers/all-minilm-l6-v2", "name": "all-MiniLM-L6-v2",
     "description": "A small and fast text embedding model that maps sentences & paragraphs to a 384 dimensional dense vector space.",
     "url": "https://huggingface.co/sentence-transformers/all-MiniLM-L6-v2",
     "tags": ["sentence-transformers", "embedding", "miniLM", "pytorch"],
     "category": "sentence-similarity", "popularityMetric": 5432178, "lastUpdated": "2023-03-10T16:28:45Z",
     "likes": 3156, "owner": "sentence-transformers", "framework": "PyTorch", "size": "90 MB", "license": "Apache 2.0",
     "isFineTuned": True},
    {"id": "hf-model:stabilityai/stable-diffusion-2-1", "name": "Stable Diffusion 2.1",
     "description": "Latent text-to-image diffusion model capable of generating photo-realistic images given any text input.",
     "url": "https://huggingface.co/stabilityai/stable-diffusion-2-1",
     "tags": ["stable-diffusion", "text-to-image", "diffusion", "pytorch", "generative"],
     "category": "text-to-image", "popularityMetric": 9876543, "lastUpdated": "2023-05-01T12:34:56Z",
     "likes": 7654, "owner": "StabilityAI", "framework": "PyTorch", "size": "5.3 GB",
     "license": "CreativeML Open RAIL++-M License"},
    {"id": "hf-model:openai/clip-vit-base-patch32", "name": "CLIP ViT-B/32",
     "description": "CLIP model with ViT-B/32 architecture for zero-shot classification and multimodal embedding.",
     "url": "https://huggingface.co/openai/clip-vit-base-patch32",
     "tags": ["clip", "vision", "multimodal", "pytorch", "zero-shot"],
     "category": "zero-shot-image-classification", "popularityMetric": 4321987, "lastUpdated": "2023-02-18T14:25:36Z",
     "likes": 3421, "owner": "OpenAI", "framework": "PyTorch", "size": "600 MB", "license": "MIT"},
    {"id": "hf-model:meta-llama/llama-2-7b-hf", "name": "Llama 2 7B",
     "description": "Llama 2 is a collection of pretrained and fine-tuned generative text models. This is the 7B parameter base model.",
     "url": "https://huggingface.co/meta-llama/Llama-2-7b-hf",
     "tags": ["llama", "text-generation", "transformer", "pytorch", "large-language-model"],
     "category": "text-generation", "popularityMetric": 8745632, "lastUpdated": "2023-07-20T10:12:34Z",
     "likes": 6543, "owner": "Meta AI", "framework": "PyTorch", "size": "13.5 GB",
     "license": "Llama 2 Community License"},
    {"id": "hf-model:runwayml/stable-diffusion-v1-5", "name": "Stable Diffusion v1.5",
     "description": "Latent text-to-image diffusion model capable of generating photo-realistic images given any text input.",
     "url": "https://huggingface.co/runwayml/stable-diffusion-v1-5",
     "tags": ["stable-diffusion", "text-to-image", "diffusion", "pytorch", "generative"],
     "category": "text-to-image", "popularityMetric": 12345678, "lastUpdated": "2023-03-15T17:45:23Z",
     "likes": 8765, "owner": "RunwayML", "framework": "PyTorch", "size": "4.2 GB",
     "license": "CreativeML Open RAIL License"},
    {"id": "hf-model:mistralai/mixtral-8x7b-v0.1", "name": "Mixtral 8x7B",
     "description": "Sparse mixture of experts model with 8 experts of 7B parameters, 2 active per token.",
     "url": "https://huggingface.co/mistralai/Mixtral-8x7B-v0.1",
     "tags": ["mixtral", "moe", "sparse", "text-generation", "large-language-model", "pytorch"],
     "category": "text-generation", "popularityMetric": 6543210, "lastUpdated": "2023-12-01T09:23:45Z",
     "likes": 4567, "owner": "MistralAI", "framework": "PyTorch", "size": "26.5 GB", "license": "Apache 2.0"},
]

KAGGLE_ONLY_DATASETS: list[dict[str, Any]] = [
    {"id": "kaggle:census-income-dataset", "name": "Census Income Dataset",
     "description": "Predict whether income exceeds $50K/yr based on census data. Also known as 'Adult' dataset.",
     "url": "https://www.kaggle.com/datasets/census-income-dataset",
     "tags": ["tabular", "census", "income", "prediction", "classification"],
     "category": "tabular", "popularityMetric": 358423, "lastUpdated": "2023-03-15T14:23:10Z",
     "voteCount": 1245, "size": "3.8 MB", "owner": "US Census Bureau", "license": "CC0: Public Domain",
     "isTabular": True, "usability": 9},
    {"id": "kaggle:mnist-handwritten-digits", "name": "MNIST Handwritten Digits",
     "description": "The classic dataset of handwritten digits. Perfect for beginners in computer vision and deep learning.",
     "url": "https://www.kaggle.com/datasets/mnist-handwritten-digits",
     "tags": ["computer vision", "deep learning", "digit recognition", "image classification"],
     "category": "vision", "popularityMetric": 789652, "lastUpdated": "2023-01-10T09:12:45Z",
     "voteCount": 2341, "size": "11.6 MB", "owner": "Yann LeCun", "license": "CC BY-SA 3.0",
     "isTabular": False, "usability": 10},
    {"id": "kaggle:amazon-product-reviews", "name": "Amazon Product Reviews",
     "description": "Massive dataset of product reviews from Amazon spanning May 1996 to July 2014.",
     "url": "https://www.kaggle.com/datasets/amazon-product-reviews",
     "tags": ["NLP", "sentiment analysis", "e-commerce", "product reviews", "text classification"],
     "category": "nlp", "popularityMetric": 452187, "lastUpdated": "2023-02-28T18:34:22Z",
     "voteCount": 1876, "size": "11.8 GB", "owner": "Amazon", "license": "CC0: Public Domain",
     "isTabular": False, "usability": 7},
    {"id": "kaggle:covid19-global-data", "name": "COVID-19 Global Data",
     "description": "Comprehensive dataset of COVID-19 cases, deaths, and recoveries worldwide. Updated daily.",
     "url": "https://www.kaggle.com/datasets/covid19-global-data",
     "tags": ["healthcare", "covid-19", "pandemic", "time series", "global"],
     "category": "tabular", "popularityMetric": 678941, "lastUpdated": "2023-06-01T00:00:00Z",
     "voteCount": 2145, "size": "250 MB", "owner": "Johns Hopkins University", "license": "CC BY 4.0",
     "isTabular": True, "usability": 9},
    {"id": "kaggle:netflix-movies-shows", "name": "Netflix Movies and TV Shows",
     "description": "Dataset of Netflix movies and TV shows as of 2021, including cast, directors, ratings, release year, duration, etc.",
     "url": "https://www.kaggle.com/datasets/netflix-movies-shows",
     "tags": ["entertainment", "streaming", "movies", "TV shows", "recommendation"],
     "category": "tabular", "popularityMetric": 321456, "lastUpdated": "2023-04-17T11:23:45Z",
     "voteCount": 1589, "size": "5.2 MB", "owner": "Netflix", "license": "CC BY-NC-SA 4.0",
     "isTabular": True, "usability": 8},
    {"id": "kaggle:stock-market-data", "name": "Historical Stock Market Data",
     "description": "Historical daily price and volume data for major US stocks and ETFs from 1980 to present.",
     "url": "https://www.kaggle.com/datasets/stock-market-data",
     "tags": ["finance", "stocks", "time series", "trading", "investment"],
     "category": "tabular", "popularityMetric": 521378, "lastUpdated": "2023-05-12T16:45:30Z",
     "voteCount": 1963, "size": "4.7 GB", "owner": "Yahoo Finance", "license": "CC BY 4.0",
     "isTabular": True, "usability": 7},
    {"id": "kaggle:imdb-movie-reviews", "name": "IMDB Movie Reviews Sentiment Analysis",
     "description": "50,000 movie reviews specifically for sentiment analysis. Labeled as positive or negative.",
     "url": "https://www.kaggle.com/datasets/imdb-movie-reviews",
     "tags": ["NLP", "sentiment analysis", "movie reviews", "text classification", "binary classification"],
     "category": "nlp", "popularityMetric": 412356, "lastUpdated": "2023-01-25T09:17:23Z",
     "voteCount": 1784, "size": "80 MB", "owner": "Stanford University", "license": "CC BY-SA 4.0",
     "isTabular": False, "usability": 9},
    {"id": "kaggle:house-prices-advanced-regression", "name": "House Prices: Advanced Regression Techniques",
     "description": "Predict house prices with 79 explanatory variables describing residential homes in Ames, Iowa.",
     "url": "https://www.kaggle.com/datasets/house-prices-advanced-regression",
     "tags": ["regression", "housing", "prediction", "real estate", "tabular"],
     "category": "tabular", "popularityMetric": 623145, "lastUpdated": "2023-03-05T13:24:17Z",
     "voteCount": 2103, "size": "950 KB", "owner": "Kaggle", "license": "CC0: Public Domain",
     "isTabular": True, "usability": 8},
    {"id": "kaggle:credit-card-fraud", "name": "Credit Card Fraud Detection",
     "description": "Anonymized credit card transactions labeled as fraudulent or genuine. Highly imbalanced dataset.",
     "url": "https://www.kaggle.com/datasets/credit-card-fraud",
     "tags": ["fraud detection", "anomaly detection", "imbalanced classification", "financial", "security"],
     "category": "tabular", "popularityMetric": 487623, "lastUpdated": "2023-02-18T15:45:12Z",
     "voteCount": 1936, "size": "150 MB", "owner": "ULB Machine Learning Group", "license": "CC BY-SA 4.0",
     "isTabular": True, "usability": 9},
    {"id": "kaggle:open-images-dataset", "name": "Open Images Dataset",
     "description": "Massive dataset of 9M images with image-level labels, object bounding boxes and segmentation masks.",
     "url": "https://www.kaggle.com/datasets/open-images-dataset",
     "tags": ["computer vision", "object detection", "image segmentation", "image classification"],
     "category": "vision", "popularityMetric": 245789, "lastUpdated": "2023-04-30T12:34:56Z",
     "voteCount": 1345, "size": "565 GB", "owner": "Google", "license": "CC BY 4.0",
     "isTabular": False, "usability": 6},
]

FALLBACK_SETS: dict[str, list[dict[str, Any]]] = {
    "datasets": KAGGLE_DATASETS + HUGGINGFACE_DATASETS + PUBLIC_DATASETS,
    "repositories": REPOSITORIES,
    "models": MODELS,
    "kaggle": KAGGLE_ONLY_DATASETS,
}


def build_entries(records: list[dict[str, Any]], default_source: str = FALLBACK_SOURCE) -> list[CatalogEntry]:
    """
    Validate bundled records and convert them to entries.

    Raises:
        MalformedFallbackData: on a missing field, a bad value or a duplicate id
    """
    entries: list[CatalogEntry] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise MalformedFallbackData(f"Record #{index} is not an object")
        missing = [f for f in _REQUIRED_FIELDS if not record.get(f)]
        if missing:
            raise MalformedFallbackData(f"Record #{index} ({record.get('id')!r}) missing {missing}")
        try:
            entry = CatalogEntry.from_dict({"sourceName": default_source, **record})
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedFallbackData(f"Record #{index} ({record.get('id')!r}) is invalid: {e}") from e
        if entry.id in seen:
            raise MalformedFallbackData(f"Duplicate fallback id: {entry.id}")
        seen.add(entry.id)
        entries.append(entry)
    return entries


def load_fallback(catalog: str) -> list[CatalogEntry]:
    """Return the validated fallback set for a catalog (empty if none is bundled)."""
    records = FALLBACK_SETS.get(catalog)
    if records is None:
        logger.warning(f"No fallback set bundled for catalog '{catalog}'")
        return []
    return build_entries(records)
