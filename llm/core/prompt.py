COMPLETION_TEMPLATE = (
    "You are a helpful assistant. Answer the following question: {question}"
)
