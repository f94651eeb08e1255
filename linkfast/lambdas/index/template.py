# fmt: off
INDEX_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>LinkFast</title>
    <style>
        body { font-family: system-ui, sans-serif; background: #f4f5f7; margin: 0; }
        main { max-width: 560px; margin: 80px auto; padding: 32px; background: #fff; border-radius: 8px; }
        h1 { margin-top: 0; text-align: center; }
        form { display: flex; gap: 8px; }
        input { flex: 1; padding: 10px; border: 1px solid #ccd; border-radius: 4px; font-size: 16px; }
        button { padding: 10px 16px; border: 0; border-radius: 4px; background: #2d6cdf; color: #fff; cursor: pointer; }
        button:hover { background: #1f55b8; }
        #result, #error { display: none; margin-top: 20px; }
        #result a { font-family: monospace; word-break: break-all; }
        #error { color: #c0392b; }
    </style>
</head>
<body>
    <main>
        <h1>LinkFast</h1>
        <form id="shorten-form">
            <input type="text" id="url" name="url" placeholder="Paste a long URL" required>
            <button type="submit">Shorten</button>
        </form>
        <div id="result">
            <p>Short URL: <a id="short-url" href="#" target="_blank" rel="noopener"></a></p>
            <button type="button" id="copy">Copy</button>
        </div>
        <div id="error"></div>
    </main>
    <script>
        const form = document.getElementById('shorten-form');
        const result = document.getElementById('result');
        const error = document.getElementById('error');
        const shortUrl = document.getElementById('short-url');

        form.addEventListener('submit', async (event) => {
            event.preventDefault();
            result.style.display = 'none';
            error.style.display = 'none';

            try {
                const response = await fetch('/api/shorten', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({ url: document.getElementById('url').value }),
                });
                const data = await response.json();
                if (!response.ok) {
                    throw new Error(data.error || 'server error');
                }
                shortUrl.textContent = data.short_url;
                shortUrl.href = data.short_url;
                result.style.display = 'block';
            } catch (err) {
                error.textContent = err.message;
                error.style.display = 'block';
            }
        });

        document.getElementById('copy').addEventListener('click', async () => {
            await navigator.clipboard.writeText(shortUrl.textContent);
        });
    </script>
</body>
</html>
"""
# fmt: on
